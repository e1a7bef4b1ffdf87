"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Confirmation payload returned by write endpoints."""

    message: str = Field(..., description="Human-readable confirmation.")


class ErrorResponse(BaseModel):
    """Body returned with every non-2xx status."""

    error: str = Field(..., description="Human-readable error description.")
