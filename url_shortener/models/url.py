"""Pydantic models for URL Shortener Service."""

from typing import Optional
from pydantic import BaseModel, Field


class URLSaveRequest(BaseModel):
    """Model for saving a URL under an alias.

    Both fields are checked by the save service so that missing or
    malformed values produce the same error messages on every path.
    """

    url: Optional[str] = Field(None, description="The original long URL to shorten")
    alias: Optional[str] = Field(
        None, description="Alias to store the URL under; generated when omitted"
    )


class ErrorResponse(BaseModel):
    """Model for error responses."""

    status: str = "Error"
    error: str
