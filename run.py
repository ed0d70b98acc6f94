#!/usr/bin/env python3
"""
TrainingCycle - Main Entry Point
Player training-cycle timelines (J-x days before the next match)
"""

import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from trainingcycle.main import main

if __name__ == '__main__':
    main()
