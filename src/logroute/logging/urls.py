"""
Destination URL parsing.

``urllib.parse`` is far more forgiving than the URL grammar destinations are
written in: it silently strips control characters and never rejects bad
escapes. ``parse_destination`` adds those checks so a typo in a configured
path fails loudly instead of logging somewhere unexpected.
"""

from __future__ import annotations

import ntpath
import re
import sys
from urllib.parse import SplitResult, quote_plus, unquote, urlsplit

from logroute.errors import DestinationParseError, DestinationValidationError

STDOUT = "stdout"
STDERR = "stderr"
STREAM_KEYWORDS = frozenset({STDOUT, STDERR})

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_PORT = re.compile(r"[0-9]+")


def is_windows_abs(destination: str) -> bool:
    """True for drive-letter absolute paths when running on Windows.

    Rooted paths without a volume, such as ``/var/log/app.log``, are not
    absolute here and still go through URL parsing.
    """
    return (
        sys.platform == "win32"
        and bool(ntpath.splitdrive(destination)[0])
        and ntpath.isabs(destination)
    )


def port_text(parts: SplitResult) -> str:
    """Raw port of a parsed URL, empty when absent."""
    hostport = parts.netloc.rpartition("@")[2]
    if "]" in hostport:
        hostport = hostport.rpartition("]")[2]
    return hostport.rpartition(":")[2] if ":" in hostport else ""


def parse_destination(destination: str) -> SplitResult:
    """Split ``destination`` into URL components, rejecting malformed input."""
    if _CONTROL_CHARS.search(destination):
        raise DestinationParseError(destination, "invalid control character in URL")
    try:
        parts = urlsplit(destination)
    except ValueError as exc:
        raise DestinationParseError(destination, str(exc)) from exc
    # Out of range numbers are still ports; only non-numeric ones are malformed.
    port = port_text(parts)
    if port and not _PORT.fullmatch(port):
        raise DestinationParseError(destination, f"invalid port {port!r} after host")
    if any(_BAD_ESCAPE.search(part) for part in (parts.netloc, parts.path, parts.fragment)):
        raise DestinationParseError(destination, "invalid URL escape")
    if not parts.scheme and ":" in parts.path.split("/", 1)[0]:
        raise DestinationParseError(destination, "first path segment in URL cannot contain colon")
    return parts


def url_path(parts: SplitResult) -> str:
    """Unescaped path component of a parsed URL."""
    return unquote(parts.path)


def is_file_url(parts: SplitResult) -> bool:
    """True when ``parts`` names a filesystem path rather than a stream or other sink."""
    return parts.scheme in ("", "file") and url_path(parts) not in STREAM_KEYWORDS


def check_file_url(parts: SplitResult, destination: str) -> None:
    """Reject file URLs carrying anything besides a path and a local host.

    The checks run in a fixed order and stop at the first violation.
    """
    if "@" in parts.netloc:
        raise DestinationValidationError(
            destination, "user", "user and password not allowed with file URLs"
        )
    if parts.fragment:
        raise DestinationValidationError(destination, "fragment", "fragments not allowed with file URLs")
    if parts.query:
        raise DestinationValidationError(destination, "query", "query parameters not allowed with file URLs")
    # Port and hostname are checked separately for clearer messages.
    if port_text(parts):
        raise DestinationValidationError(destination, "port", "ports not allowed with file URLs")
    hostname = parts.hostname or ""
    if hostname not in ("", "localhost"):
        raise DestinationValidationError(
            destination, "hostname", "file URLs must leave host empty or use localhost"
        )


def escape_path(path: str) -> str:
    """Query-escape ``path`` so it survives as a URL parameter value."""
    return quote_plus(path, safe="")
