"""
TrainingCycle - player training-cycle timelines (J-x periodization)
"""

__version__ = "1.0.0"
