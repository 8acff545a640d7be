"""
API module for cors_policy.

A small aiohttp service exposing the CORS decision engine, mostly useful
to try a configuration out.
"""

from .app import app_factory

__all__ = ["app_factory"]
