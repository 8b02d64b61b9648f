"""Error kinds raised by the name generator."""

from __future__ import annotations


class NamesmithError(Exception):
    """Base class for all namesmith errors."""


class LoadError(NamesmithError):
    """A word list could not be loaded. Fatal to the current request."""


class InvalidInput(NamesmithError, ValueError):
    """Bad input handed to the core: empty word list, unknown option, bad count."""


class PersistenceError(NamesmithError):
    """History storage read/write/parse failure. Always absorbed by the store."""
