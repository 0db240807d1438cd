"""
Custom exceptions for the darkroom stock library.
"""

from __future__ import annotations


class StylizeError(Exception):
    """Base exception for stylization errors."""

    pass


class DecodeError(StylizeError):
    """Input bytes could not be decoded into a pixel buffer."""

    pass


class RenderError(StylizeError):
    """A surface could not be allocated or a compositing step failed."""

    pass


class UnsupportedPresetError(StylizeError, ValueError):
    """Requested stock id is not part of the catalogue."""

    pass


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class BadImageError(APIError):
    """Uploaded body is not a readable image."""

    def __init__(self, message: str = "Could not decode image") -> None:
        super().__init__(message, status_code=400)


class NotFoundError(APIError):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class ServerRenderError(APIError):
    """Rendering failed on the server side."""

    def __init__(self, message: str = "Rendering failed") -> None:
        super().__init__(message, status_code=500)
