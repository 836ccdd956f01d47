"""
Custom exceptions for the stats pipeline with user-friendly error messages.
"""

class HypePulseError(Exception):
    """Base exception for errors raised while answering a stats command."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class UpstreamError(HypePulseError):
    """Base exception for failures reported by the Mojang or Hypixel APIs."""

class NotFound(UpstreamError):
    """Raised when an upstream lookup gives a definitive negative answer."""

class UpstreamUnavailable(UpstreamError):
    """Raised when a transient failure persists through every retry attempt."""
    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts

class MalformedResponse(UpstreamError):
    """Raised when an upstream reports success but the payload is missing required fields."""

class TransientUpstreamError(UpstreamError):
    """Raised for a single failed attempt that is worth retrying (network error, timeout, 5xx).

    Never escapes the upstream client: once retries are exhausted it is replaced by
    UpstreamUnavailable.
    """

class FormatterFault(HypePulseError):
    """Raised when the formatter is handed no record at all."""
