#!/usr/bin/env python3
"""
Combination Lock - Main entry point for Buildozer/Android builds

This file is required by Buildozer for Android APK packaging.
For desktop usage, use 'combination-lock-gui' command after pip install.
"""

import os
import sys

# Add src directory to path for package imports
src_path = os.path.join(os.path.dirname(__file__), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

# Launch the GUI app
from combination_lock.gui.app import main

if __name__ == '__main__':
    main()
