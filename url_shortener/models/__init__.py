"""Models package for URL Shortener Service."""

from .url import URLSaveRequest, ErrorResponse

__all__ = ["URLSaveRequest", "ErrorResponse"]
