"""Pytest configuration for all tests."""

import os
import sys
import tempfile

# Make the src modules importable when pytest is run from the repository root
SRC_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

import constants  # noqa: E402

# Keep any file logs written during tests out of the project tree
constants.init_testing(log_dir=tempfile.mkdtemp(prefix="lolmark_test_logs_"))
