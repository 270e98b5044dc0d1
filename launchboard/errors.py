"""Failure taxonomy for loading the launch set."""
from __future__ import annotations

from typing import Optional


class FetchError(Exception):
    """Base class for a load that produced no launch set."""

    kind = "fetch"

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source = source


class NetworkError(FetchError):
    """Both sources failed at the transport level."""

    kind = "network"


class ParseError(FetchError):
    """A source answered but its body is not a list of launch records."""

    kind = "parse"


class IntegrityError(FetchError):
    """The merged set breaks an invariant (e.g. duplicate flight_number)."""

    kind = "integrity"


class PartialFailureWarning(UserWarning):
    """One source failed; the set holds only the other source's records."""

    def __init__(self, failed_source: str, reason: str):
        super().__init__(f"{failed_source} launches unavailable: {reason}")
        self.failed_source = failed_source
        self.reason = reason


class LoadCancelledError(Exception):
    """The caller cancelled the load; not a failure of either source."""
