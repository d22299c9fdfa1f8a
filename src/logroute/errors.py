"""
Exception hierarchy for log routing.

Every error raised by the routing layer derives from LogRouteError so callers
can abort logging setup with a single except clause. Filesystem failures are
left as the builtin OSError.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LogRouteError(Exception):
    """Base class for log routing errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class DestinationParseError(LogRouteError):
    """A destination string is not a syntactically valid URL."""

    def __init__(self, destination: str, reason: str) -> None:
        super().__init__(
            f"can't parse {destination!r} as a URL: {reason}",
            code="DESTINATION_PARSE",
            details={"destination": destination, "reason": reason},
        )
        self.destination = destination
        self.reason = reason


class DestinationValidationError(LogRouteError):
    """A well-formed URL breaks the rules for file destinations."""

    def __init__(self, destination: str, component: str, message: str) -> None:
        super().__init__(
            f"{message}: got {destination}",
            code="DESTINATION_INVALID",
            details={"destination": destination, "component": component},
        )
        self.destination = destination
        self.component = component


class SinkRegistrationError(LogRouteError):
    """A sink scheme could not be registered."""

    def __init__(self, scheme: str, message: str) -> None:
        super().__init__(message, code="SINK_REGISTRATION", details={"scheme": scheme})
        self.scheme = scheme


class UnknownSinkError(LogRouteError):
    """No sink factory is registered for a destination's scheme."""

    def __init__(self, scheme: str, destination: str) -> None:
        super().__init__(
            f"no sink found for scheme {scheme!r} (destination {destination!r})",
            code="SINK_UNKNOWN",
            details={"scheme": scheme, "destination": destination},
        )
        self.scheme = scheme
        self.destination = destination


class SinkWriteError(LogRouteError):
    """One or more sinks failed while writing or syncing."""

    def __init__(self, errors: list[BaseException]) -> None:
        detail = "; ".join(str(err) for err in errors)
        super().__init__(detail, code="SINK_WRITE", details={"count": len(errors)})
        self.errors = errors
