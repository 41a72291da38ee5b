#!/usr/bin/env python3
"""
TalisPod - Python Edition

Thin wrapper around the command line front end in ``talispod.cli``.

To run: python main.py area 25 50 100
"""

from talispod.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
