"""Rendering configuration management for LOLMark."""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import tomli

import constants
from common.base.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = constants.DEFAULT_CONFIG_PATH

@dataclass(frozen=True)
class RenderConfig:
    """Options that shape the generated HTML document."""
    default_title: str = "LOLCODE Markdown"
    charset: str = "UTF-8"
    lang: str = "en"
    heading_from_title: bool = False

    @classmethod
    def from_dict(cls, settings: Dict[str, Any]) -> "RenderConfig":
        """
        Build a config from a [render] table, rejecting unknown keys and bad types.

        :param settings: Mapping loaded from TOML
        :return: RenderConfig instance
        :raises ValueError: On unknown keys or wrongly typed values
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(settings) - set(known))
        if unknown:
            raise ValueError(f"Unknown render settings: {', '.join(unknown)}")

        for key, value in settings.items():
            expected = bool if key == "heading_from_title" else str
            if not isinstance(value, expected):
                raise ValueError(
                    f"Render setting '{key}' must be {expected.__name__}, got {type(value).__name__}"
                )
        if "charset" in settings and not settings["charset"].strip():
            raise ValueError("Render setting 'charset' must not be empty")

        return cls(**settings)

def load_render_config(config_path: Optional[str] = None) -> RenderConfig:
    """
    Load rendering options from a TOML file.

    A missing file yields the defaults; an unreadable or invalid one raises.

    :param config_path: Path to TOML configuration file
    :return: RenderConfig instance
    """
    config_path = config_path or DEFAULT_CONFIG_PATH
    if not os.path.exists(config_path):
        logger.debug(f"No render configuration at {config_path}, using defaults")
        return RenderConfig()

    try:
        logger.info(f"Loading render configuration from {config_path}")
        with open(config_path, 'rb') as f:
            config = tomli.load(f)
        render_config = RenderConfig.from_dict(config.get('render', {}))
    except Exception as e:
        logger.error(f"Error loading render configuration: {str(e)}")
        raise

    logger.info(f"Render configuration loaded: {render_config}")
    return render_config

# Global instance
_render_config: Optional[RenderConfig] = None

def init_render_config(config_path: Optional[str] = None) -> RenderConfig:
    """
    Initialize global render configuration.

    :param config_path: Path to render configuration file
    :return: RenderConfig instance
    """
    global _render_config
    _render_config = load_render_config(config_path)
    return _render_config

def get_render_config() -> RenderConfig:
    """
    Get global render configuration, loading the default file on first use.

    :return: RenderConfig instance
    """
    global _render_config
    if _render_config is None:
        _render_config = load_render_config(DEFAULT_CONFIG_PATH)
    return _render_config

def reset_render_config() -> None:
    """Drop the global instance (primarily for testing)."""
    global _render_config
    _render_config = None
