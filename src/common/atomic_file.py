"""Atomic file writing so an interrupted translation never leaves partial HTML.

Usage:
    from common.atomic_file import atomic_write_text

    atomic_write_text("/path/to/page.html", html)
"""

import os
import tempfile

from common.base.logging_config import get_logger

logger = get_logger(__name__)


def atomic_write_text(file_path: str, content: str, encoding: str = 'utf-8') -> None:
    """Replace file_path with content in a single rename.

    The text goes to a hidden sibling file that is flushed to disk and then
    renamed over the target, so readers see either the old file or the
    complete new one.

    Args:
        file_path: Destination path; missing parent directories are created
        content: Text to write
        encoding: Text encoding (default: utf-8)

    Raises:
        OSError: If the directory, the temp file or the rename fails. The
            target is left as it was and the temp file is removed.
    """
    target_dir = os.path.dirname(os.path.abspath(file_path))
    os.makedirs(target_dir, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        'w', encoding=encoding, dir=target_dir, prefix='.', suffix='.part', delete=False
    ) as staging:
        staging_path = staging.name
        try:
            staging.write(content)
            staging.flush()
            os.fsync(staging.fileno())
        except OSError as e:
            logger.error(f"Could not write {staging_path}: {e}")
            staging.close()
            _discard(staging_path)
            raise

    try:
        os.replace(staging_path, file_path)
    except OSError as e:
        logger.error(f"Could not move {staging_path} into place at {file_path}: {e}")
        _discard(staging_path)
        raise

    logger.debug(f"Wrote {len(content)} characters to {file_path}")


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
