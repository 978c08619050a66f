"""Exception hierarchy for shortcode registry operations.

The registry raises these; the HTTP layer maps each type to a status code and
response body (see shorty.routes).
"""

__all__ = [
    "ShortyError",
    "RegistrationError",
    "MissingURLError",
    "MalformedURLError",
    "InvalidShortcodeFormatError",
    "ShortcodeTakenError",
    "ShortcodeNotFoundError",
    "ShortcodeSpaceExhaustedError",
]


class ShortyError(Exception):
    """Base exception for all application-specific errors."""

    error_code = "shorty:error"


class RegistrationError(ShortyError):
    """Base exception for rejected registrations."""

    error_code = "register:registration_error"


class MissingURLError(RegistrationError):
    """Raised when no target URL was supplied."""

    error_code = "register:missing_url"


class MalformedURLError(RegistrationError):
    """Raised when the target URL is not a well-formed absolute URL."""

    error_code = "register:malformed_url"

    def __init__(self, url: object) -> None:
        super().__init__(f"Malformed URL: {url!r}")
        self.url = url


class InvalidShortcodeFormatError(RegistrationError):
    """Raised when a desired shortcode does not match the allowed pattern."""

    error_code = "register:invalid_shortcode_format"

    def __init__(self, shortcode: object, pattern: str) -> None:
        super().__init__(f"Shortcode {shortcode!r} does not match {pattern}")
        self.shortcode = shortcode
        self.pattern = pattern


class ShortcodeTakenError(RegistrationError):
    """Raised when a desired shortcode is already registered or reserved."""

    error_code = "register:shortcode_taken"

    def __init__(self, shortcode: str) -> None:
        super().__init__(f"Shortcode {shortcode!r} is already in use")
        self.shortcode = shortcode


class ShortcodeNotFoundError(ShortyError):
    """Raised when resolving or inspecting an unknown shortcode."""

    error_code = "lookup:shortcode_not_found"

    def __init__(self, shortcode: str) -> None:
        super().__init__(f"Shortcode {shortcode!r} not found")
        self.shortcode = shortcode


class ShortcodeSpaceExhaustedError(ShortyError):
    """Raised when code generation keeps colliding past the attempt limit."""

    error_code = "register:shortcode_space_exhausted"

    def __init__(self, attempts: int) -> None:
        super().__init__(f"No free shortcode found after {attempts} attempts")
        self.attempts = attempts
