#!/usr/bin/env python3
"""Simple launcher for the assistant widget."""

import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from assistant_widget.app import main

if __name__ == "__main__":
    main()
