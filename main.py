"""Run the CHIP-8 emulator: python main.py ROM"""

import sys

from chix8.cli import main

if __name__ == "__main__":
    sys.exit(main())
