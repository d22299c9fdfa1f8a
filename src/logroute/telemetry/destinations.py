"""
Rewriting of configured log destinations onto a rotation sink scheme.
"""

from __future__ import annotations

from typing import Iterable

from logroute.logging.urls import (
    check_file_url,
    escape_path,
    is_file_url,
    is_windows_abs,
    parse_destination,
    url_path,
)


def rotation_url(scheme: str, path: str) -> str:
    """URL under ``scheme`` that carries ``path`` as its ``path`` query parameter."""
    return f"{scheme}:?path={escape_path(path)}"


def rewrite_destinations(paths: Iterable[str], scheme: str) -> list[str]:
    """Point every file destination in ``paths`` at the ``scheme`` sink.

    ``stdout``, ``stderr`` and URLs of other schemes come back unchanged. The
    first invalid destination raises and nothing is returned for the batch.

    Raises:
        DestinationParseError: a destination is not a valid URL.
        DestinationValidationError: a file URL carries user info, a fragment,
            a query, a port or a non-local host.
    """
    res: list[str] = []
    for p in paths:
        # Drive-letter paths are not URLs; don't hand them to the parser.
        if is_windows_abs(p):
            res.append(rotation_url(scheme, p))
            continue
        u = parse_destination(p)
        if is_file_url(u):
            check_file_url(u, p)
            res.append(rotation_url(scheme, url_path(u)))
            continue
        res.append(p)
    return res
