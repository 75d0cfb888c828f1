"""
Hand Cricket - human vs. computer hand cricket with career stats and achievements
"""
__version__ = "0.1.0"
