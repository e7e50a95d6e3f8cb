"""E-waste reporting and rewards backend"""

__version__ = "1.0.0"
