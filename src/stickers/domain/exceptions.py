"""Domain-level exceptions.

All failures the core can report are subclasses of DomainException so the
CLI and HTTP layers can catch them uniformly and display user-friendly
messages.
"""

from __future__ import annotations

from collections.abc import Iterable


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """An order payload or value violated an invariant.

    ``fields`` holds every missing or invalid field name so a caller can
    build one actionable message instead of reporting them one at a time.
    """

    def __init__(self, message: str, fields: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.fields: frozenset[str] = frozenset(fields)


class ConfigurationError(DomainException):
    """Required external configuration is absent or malformed."""


class UpstreamError(DomainException):
    """The payment provider could not create a checkout session."""
