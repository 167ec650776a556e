"""Response schemas for URL Shortener Service."""

from pydantic import BaseModel


class URLSaveResponse(BaseModel):
    """Response model for a saved URL."""

    status: str = "OK"
    alias: str


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
