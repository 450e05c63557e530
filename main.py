#!/usr/bin/env python3
"""HZLauncher entry point"""

from hzlauncher.cli import main

if __name__ == "__main__":
    main()
