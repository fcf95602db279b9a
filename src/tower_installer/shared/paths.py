"""Path management for tower-installer."""

from pathlib import Path

# Base directory for installer settings
TOWER_DIR = Path.home() / ".tower"

# Persistent CLI configuration
CONFIG_FILE = TOWER_DIR / "config.yaml"

# Paths inside a checked-out tower source tree
SERVER_PACKAGE = Path("packages") / "server"
SOURCE_COMPOSE_FILE = SERVER_PACKAGE / "docker-compose.yml"
SETUP_SCRIPT = SERVER_PACKAGE / "scripts" / "setup.js"
