"""
Controllers package for the wiki application.

This package contains all the route controllers organized by functionality.
"""

from .settings_controller import settings_router

__all__ = [
    'settings_router'
]
