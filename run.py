#!/usr/bin/env python3
"""
Wellspring - Entry Point

Run with: python run.py
Serves the API at http://127.0.0.1:8000 by default.
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

import uvicorn

from src.core.config import config
from src.core.logger import configure_logging


def main():
    """Launch the Wellspring API."""
    configure_logging(show_debug=config.debug)

    print("🚀 Starting Wellspring...")
    print(f"   Server: http://{config.host}:{config.port}")
    print(f"   Database: {config.db_path}")
    print()

    uvicorn.run("src.api.app:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
