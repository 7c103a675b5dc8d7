"""API package for the recruitment service."""

from .main import create_app

__all__ = ["create_app"]
