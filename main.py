#!/usr/bin/env python3
"""What Would You Discard - mahjong problem generator"""

import sys

from wwyd.cli import main

if __name__ == "__main__":
    sys.exit(main())
