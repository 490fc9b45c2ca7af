#!/usr/bin/env python3
"""
AI Tutorial Runner - Main entry point.

Usage:
    python run_tutorial.py setup-env
    python run_tutorial.py run
    python run_tutorial.py listen
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from ai_tutorial_runner.cli.runner import main

if __name__ == "__main__":
    main()
