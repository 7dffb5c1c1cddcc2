"""
tripoverlap - find the best overlapping block of free days for a group trip.
"""

__version__ = "0.1.0"
