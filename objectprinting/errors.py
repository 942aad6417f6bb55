"""Exception hierarchy for objectprinting."""

from __future__ import annotations


class ObjectPrintingError(Exception):
    """Base objectprinting error."""


class InvalidConfiguration(ObjectPrintingError, ValueError):
    """Raised when a printing rule cannot be registered."""


class UnsupportedMemberSelection(ObjectPrintingError, NotImplementedError):
    """Raised when members are requested with an unsupported selection."""


__all__ = [
    "ObjectPrintingError",
    "InvalidConfiguration",
    "UnsupportedMemberSelection",
]
