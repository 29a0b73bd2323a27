"""Common - Shared functionality for the LOLMark translator."""

from . import base
from . import config

__all__ = ["base", "config"]
