"""Custom exception hierarchy for enslookup."""

from typing import Any, ClassVar

from enslookup.core.types import EnsErrorKind


class EnsError(Exception):
    """Base exception for all resolution errors."""

    kind: ClassVar[EnsErrorKind] = EnsErrorKind.ENS_UNKNOWN
    default_message: ClassVar[str] = "ENS resolution failed"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NoNetworkError(EnsError):
    """No network selected and no registry address available."""

    kind = EnsErrorKind.NO_NETWORK
    default_message = "No network selected and no ENS registry configured"


class EnsUnknownError(EnsError):
    """Registry lookup failed, fallback exhausted, or an unrecognized failure."""

    kind = EnsErrorKind.ENS_UNKNOWN
    default_message = "Unknown ENS resolution failure"


class InvalidInputError(EnsError):
    """Malformed name or address."""

    kind = EnsErrorKind.INVALID_INPUT
    default_message = "Invalid ENS name or address"


class DecodeIssueError(EnsError):
    """A contract or gateway response could not be decoded."""

    kind = EnsErrorKind.DECODE_ISSUE
    default_message = "Failed to decode response"


class TooManyRedirectionsError(EnsError):
    """Off-chain lookup hops exceeded the configured maximum."""

    kind = EnsErrorKind.TOO_MANY_REDIRECTIONS
    default_message = "Too many off-chain redirections"

    def __init__(
        self,
        message: str | None = None,
        max_redirects: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.max_redirects = max_redirects
