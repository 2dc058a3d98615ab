"""
Marquee - Movie browsing client for The Movie Database.
"""
__version__ = '1.0.0'
