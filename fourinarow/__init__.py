"""
fourinarow - Rules engine and turn loop for two-player four-in-a-row

This package provides the grid state, win and draw detection, a game
session that drives turns and notifies observers, a Gymnasium adapter and
a terminal interface.
"""

# Version number
__version__ = '0.1.0'
