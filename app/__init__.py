"""
Author Analysis web server.

Serves the static site and forwards the API namespace to the analysis program.
"""

__version__ = "1.0.0"
