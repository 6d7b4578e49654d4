"""
modeshift
---------
Mode controller with asynchronous stage loading for pygame applications.
"""

__version__ = "0.1.0"
