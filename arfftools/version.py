# License: BSD 3 clause
"""
Define version number.

This module exists solely for version information so we only have to change it
in one place.
"""

__version__ = "1.0.0"
VERSION = tuple(int(x) for x in __version__.split("."))
