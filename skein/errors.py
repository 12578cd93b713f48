"""
Skein errors.

Malformed diagrams are a soft failure (see gauss_code.py) and only raise
when a caller asks for strict parsing. Everything raised here reaches the
caller; the store never swallows these.
"""


class SkeinError(Exception):
    """Base class for every error raised by skein."""


class MalformedGaussCodeError(SkeinError, ValueError):
    """A Gauss code failed the well-formedness rule under strict parsing."""


class ReadOnlyError(SkeinError):
    """A mutation was attempted against a read-only SkeinDB handle."""


class DuplicateKnotError(SkeinError):
    """A knot with the same name is already stored."""


class KnotNotFoundError(SkeinError, KeyError):
    """update_metadata() was asked to touch a knot that is not stored."""

    def __str__(self):
        return f"Knot '{self.args[0]}' not found" if self.args else "Knot not found"


class ProviderUnavailableError(SkeinError):
    """A conversion hook was requested but no invariant provider is registered."""
