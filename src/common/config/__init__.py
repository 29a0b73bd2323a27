"""Common configuration management for LOLMark."""

from .render_config import (
    RenderConfig,
    load_render_config,
    init_render_config,
    get_render_config,
    reset_render_config,
)

__all__ = [
    'RenderConfig', 'load_render_config', 'init_render_config', 'get_render_config',
    'reset_render_config',
]
