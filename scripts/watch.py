#!/usr/bin/env python3
"""
Flyover Flight Watcher Script

Usage:
    python scripts/watch.py [--config CONFIG_FILE] [--once]
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from flyover.cli import main


if __name__ == "__main__":
    sys.exit(main())
