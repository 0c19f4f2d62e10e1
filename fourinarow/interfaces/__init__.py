"""
fourinarow.interfaces - User interfaces for the game engine

This package contains the terminal interface that renders a session and
maps typed input to columns.
"""

# Don't import anything here to avoid circular imports
__all__ = []
