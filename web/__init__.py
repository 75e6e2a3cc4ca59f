"""
Userhub web front end.

Server-rendered login and profile pages backed by cookie sessions.
"""

from .app import app, create_web_app

__all__ = ["app", "create_web_app"]
