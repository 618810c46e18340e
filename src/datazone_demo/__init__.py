"""Demonstration client for the Amazon DataZone control-plane API."""

import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .service import DataZoneService

# Try to get version from installed package first
try:
    __version__ = version("datazone-demo")
except PackageNotFoundError:
    # Package not installed, read from pyproject.toml
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    __version__ = "0.1.0"  # Fallback
    if pyproject_path.exists():
        match = re.search(
            r'version\s*=\s*["\']([^"\']+)["\']',
            pyproject_path.read_text(encoding="utf-8"),
        )
        if match:
            __version__ = match.group(1)

__all__ = ["DataZoneService", "__version__"]
