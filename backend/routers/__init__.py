"""Routers module - FastAPI route handlers"""

from . import config, formatter

__all__ = ["config", "formatter"]
