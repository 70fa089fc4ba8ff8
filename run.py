#!/usr/bin/env python3
"""
HubExplorer Application Entry Point
"""

import sys
from hubexplorer.__main__ import main

if __name__ == '__main__':
    sys.exit(main())
