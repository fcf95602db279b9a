"""Tower Installer - pre-flight checks and deployment for the tower stack."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tower-installer")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"  # Fallback for source checkouts without metadata

from .main import main

__all__ = ["main", "__version__"]
