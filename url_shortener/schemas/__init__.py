"""Schemas package for URL Shortener Service."""

from .url import URLSaveResponse, HealthResponse

__all__ = ["URLSaveResponse", "HealthResponse"]
