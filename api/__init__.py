"""
api package - FastAPI stylize API.

Public API:
    server   - FastAPI application and endpoints
    models   - Pydantic response models
"""

from . import models, server

__all__ = [
    "server",
    "models",
]
