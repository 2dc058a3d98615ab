"""
Marquee Controllers - Application state owners.
"""
from .navigation import NavigationController

__all__ = ['NavigationController']
