"""
Web module for the page flattener.

Provides a Flask-based web interface that serves flattened pages.
"""

from .app import create_app

__all__ = ["create_app"]
