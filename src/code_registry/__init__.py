"""
Code Registry - Web-Administered Message Code Registry.

A single editable table of numbered message codes, served over HTTPS and
persisted to a flat snapshot file after every change.
"""

from code_registry.version import __version__

# API module is available but not exported by default
# Import explicitly: from code_registry.api import create_app

__all__ = ["__version__"]
