"""
rexport - export repositories to a remote hosting target as background jobs.
"""

__version__ = "0.1.0"
