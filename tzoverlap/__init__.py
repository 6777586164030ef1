"""
tzoverlap - find shared working hours between two time zones.
"""

__version__ = "0.1.0"
