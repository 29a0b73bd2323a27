#!/usr/bin/env python3

"""LOLMark launch script: translate a .lol document into HTML."""

import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from lol_parser.cli import main

if __name__ == '__main__':
    sys.exit(main())
