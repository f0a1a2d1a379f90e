"""
Exposes the version of geodraw
"""

__all__ = ['__version__']

__version__ = 'v0.1.0'
