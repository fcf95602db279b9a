"""Shared modules for tower-installer.

- Logging setup (structlog)
- Well-known paths
"""

from .logging import configure_logging, get_logger, level_for_verbosity
from .paths import CONFIG_FILE, TOWER_DIR

__all__ = [
    # Paths
    "TOWER_DIR",
    "CONFIG_FILE",
    # Logging
    "configure_logging",
    "get_logger",
    "level_for_verbosity",
]
