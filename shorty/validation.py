"""Input validation for shortcode registration.

Checks run in a fixed order and raise the first failure:

1. missing / blank URL          -> MissingURLError
2. URL without scheme and host  -> MalformedURLError
3. desired code fails pattern   -> InvalidShortcodeFormatError

Uniqueness is not checked here; it has to happen under the registry lock.
"""

import re

import validators

from shorty.exceptions import InvalidShortcodeFormatError, MalformedURLError, MissingURLError

__all__ = [
    "SHORTCODE_ALPHABET",
    "SHORTCODE_PATTERN",
    "is_valid_shortcode",
    "validate_shortcode",
    "validate_target_url",
    "validate_registration",
]

SHORTCODE_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
SHORTCODE_PATTERN = "^[0-9a-zA-Z_]{4,}$"

_SHORTCODE_RE = re.compile(r"[0-9a-zA-Z_]{4,}")


def is_valid_shortcode(shortcode: str) -> bool:
    # fullmatch: "$" alone would accept a trailing newline
    return _SHORTCODE_RE.fullmatch(shortcode) is not None


def validate_target_url(url: object) -> str:
    if url is None or (isinstance(url, str) and not url.strip()):
        raise MissingURLError("url is not present")
    if not isinstance(url, str) or not validators.url(url, simple_host=True):
        raise MalformedURLError(url)
    return url


def validate_shortcode(shortcode: object) -> str:
    if not isinstance(shortcode, str) or not is_valid_shortcode(shortcode):
        raise InvalidShortcodeFormatError(shortcode, SHORTCODE_PATTERN)
    return shortcode


def validate_registration(url: object, shortcode: object = None) -> tuple[str, str | None]:
    """Validate a registration request.

    Args:
        url: Target URL as received from the caller (any type).
        shortcode: Desired shortcode, or None to auto-generate. An empty
            string counts as not supplied; any other non-string is invalid.

    Returns:
        tuple[str, str | None]: The validated URL and desired shortcode.

    Raises:
        MissingURLError: If the URL is absent or blank.
        MalformedURLError: If the URL is not an absolute URL with scheme and host.
        InvalidShortcodeFormatError: If the desired code fails SHORTCODE_PATTERN.
    """
    target_url = validate_target_url(url)
    if shortcode is None or shortcode == "":
        return target_url, None
    return target_url, validate_shortcode(shortcode)
