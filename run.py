#!/usr/bin/env python3
"""
run.py - Main entry point for the four-in-a-row engine

Examples:
    python run.py play
    python run.py play --height 7 --width 8 --debug
    python run.py test --position 0,0,0,...
    python run.py benchmark --iterations 500
"""

import sys

from fourinarow.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
