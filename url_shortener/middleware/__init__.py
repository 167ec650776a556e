"""HTTP middleware for URL Shortener Service."""

from .request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
