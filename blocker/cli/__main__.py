#!/usr/bin/env python3
"""
Entry point for blocker CLI tool.
"""

import sys

from blocker.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
