"""text-menu pizza ordering client on sqlite"""

__version__ = "1.0.0"
