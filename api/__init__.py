"""
Userhub API package.

Provides the FastAPI application for the JSON user API.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
