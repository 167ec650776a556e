"""URL shortening utilities module.

This module handles the generation and validation of aliases and target
URLs.
"""

import random
import string
import re
from typing import Optional

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..core.config import settings


# Characters drawn from when generating aliases
ALPHABET = string.ascii_letters + string.digits

MAX_ALIAS_LENGTH = 64
ALIAS_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

# Path segments served by other routes
RESERVED_ALIASES = frozenset({"health", "url"})

STATIC_ASSET_SUFFIXES = (".css", ".js", ".png", ".jpg", ".ico")

_url_adapter = TypeAdapter(AnyUrl)


def generate_alias(length: Optional[int] = None) -> str:
    """Generate a random alias.

    Args:
        length: Length of the generated alias. Defaults to settings value.

    Returns:
        Random alphanumeric alias. Uniqueness is not checked here.
    """
    length = length or settings.alias_length
    return "".join(random.choices(ALPHABET, k=length))


def validate_alias(alias: str) -> Optional[str]:
    """Validate a caller-supplied alias.

    Args:
        alias: Alias to validate.

    Returns:
        An error message, or None if the alias is acceptable.
    """
    if len(alias) > MAX_ALIAS_LENGTH or not ALIAS_PATTERN.match(alias):
        return "field Alias is not a valid alias"
    if alias in RESERVED_ALIASES:
        return "field Alias is reserved"
    return None


def validate_target_url(url: Optional[str]) -> Optional[str]:
    """Validate the URL a mapping points to.

    Args:
        url: URL to validate.

    Returns:
        An error message, or None if the URL is absolute with a host.
    """
    if not url:
        return "field URL is a required field"
    try:
        parsed = _url_adapter.validate_python(url)
    except PydanticValidationError:
        return "field URL is not a valid URL"
    if not parsed.host:
        return "field URL is not a valid URL"
    return None


def is_static_asset(path: str) -> bool:
    """Check whether a path looks like a static asset rather than an alias."""
    return path.endswith(STATIC_ASSET_SUFFIXES)
