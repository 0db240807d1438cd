"""models.py — Pydantic v2 response models for the stylize API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StockInfo(BaseModel):
    """One entry of the stock catalogue."""

    id: str = Field(description="Stock id used in /stylize/{stock}")
    name: str = Field(description="Display name")
    description: str = Field(description="One-line description of the look")
    instant_film: bool = Field(
        default=False, description="Whether output is framed as an instant print"
    )


class ErrorResponse(BaseModel):
    """Error body returned for failed requests."""

    detail: str = Field(description="Human-readable error message")
