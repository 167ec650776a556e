"""Utils package for URL Shortener Service."""

from .shortener import (
    generate_alias,
    validate_alias,
    validate_target_url,
    is_static_asset,
)

__all__ = [
    "generate_alias",
    "validate_alias",
    "validate_target_url",
    "is_static_asset",
]
