#!/usr/bin/env python3
"""
SCHIP8 -- CHIP-8 / SUPER-CHIP interpreter

Source-tree launcher; equivalent to the installed ``schip8`` command::

    python main.py roms/INVADERS --scale 10
"""

from __future__ import annotations

import os
import sys

# ---------------------------------------------------------------------------
# Ensure the project root is on sys.path so that ``schip8`` can be imported
# regardless of how the script is invoked.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from schip8.main import main


if __name__ == "__main__":
    sys.exit(main())
