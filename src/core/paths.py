"""
System paths for Wellspring.

Provides cross-platform paths using system-appropriate locations:
- Windows: %APPDATA%/Wellspring
- macOS: ~/Library/Application Support/Wellspring
- Linux: ~/.local/share/Wellspring

WELLSPRING_DATA_DIR overrides the base location on every platform.
"""
import os
import sys
from pathlib import Path


def get_app_data_dir() -> Path:
    """
    Get system-appropriate application data directory.

    Returns:
        Path to Wellspring data directory (created if not exists)
    """
    override = os.environ.get('WELLSPRING_DATA_DIR')
    if override:
        app_dir = Path(override)
    else:
        if os.name == 'nt':  # Windows
            base = Path(os.environ.get('APPDATA', Path.home()))
        elif sys.platform == 'darwin':  # macOS
            base = Path.home() / 'Library' / 'Application Support'
        else:  # Linux/Unix
            base = Path(os.environ.get('XDG_DATA_HOME', Path.home() / '.local' / 'share'))
        app_dir = base / 'Wellspring'

    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_db_path() -> Path:
    """Get path to main SQLite database."""
    return get_app_data_dir() / 'wellspring.db'
