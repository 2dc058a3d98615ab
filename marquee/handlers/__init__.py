"""
Marquee Handlers - Input handling.
"""
from .touch import TouchHandler

__all__ = ['TouchHandler']
