#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four engine

Examples:
    python run.py play --depth 6
    python run.py analyze --position "[[1,1,1,0,-1,-1,0],[-1,0,0,0,0,0,0],...]"
    python run.py benchmark --depth 5 --iterations 500
"""

import sys

from c4engine.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
