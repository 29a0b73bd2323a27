import os
from typing import Optional

# System state
TESTING: bool = False
INITIALIZED: bool = False

# Get the src directory
SRC_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(SRC_DIR)

CONFIG_DIR = os.path.join(PROJECT_ROOT, "config")
DEFAULT_CONFIG_PATH = os.path.join(CONFIG_DIR, "lolmark.toml")

# Source documents must carry this extension; rendered output replaces it.
SOURCE_EXTENSION = ".lol"
OUTPUT_EXTENSION = ".html"

def get_log_dir() -> str:
    """
    Get the log directory path.

    LOLMARK_LOG_DIR overrides the default of <project root>/logs.

    :return: Path to the log directory
    """
    return os.getenv("LOLMARK_LOG_DIR", os.path.join(PROJECT_ROOT, "logs"))

LOG_DIR = get_log_dir()

def init_testing(log_dir: Optional[str] = None) -> None:
    """
    Initialize system for testing mode.

    :param log_dir: Optional explicit log directory (e.g. a temp dir)
    """
    global TESTING, INITIALIZED, LOG_DIR
    TESTING = True
    INITIALIZED = True
    LOG_DIR = log_dir or get_log_dir()

def init_production() -> None:
    """Initialize system for production mode."""
    global TESTING, INITIALIZED, LOG_DIR
    TESTING = False
    INITIALIZED = True
    LOG_DIR = get_log_dir()

def reset() -> None:
    """Reset to uninitialized state (primarily for testing)."""
    global TESTING, INITIALIZED, LOG_DIR
    TESTING = False
    INITIALIZED = False
    LOG_DIR = get_log_dir()
