"""
Exceptions raised while loading, compiling and packaging a module.
"""

from __future__ import annotations


class BuilderError(Exception):
    """Base class for every failure that aborts a module build."""


class EmissionError(BuilderError):
    """The markup document could not be written."""


class MarkupError(EmissionError):
    """Raised when the markup builder is misused or given an invalid name.

    Writing after ``finish()``, finishing with open scopes, and element or
    attribute names that would make the document ill-formed all end here.
    """


class IdOverflowError(EmissionError):
    """A record id no longer fits the fixed-width element name."""


class ContentError(BuilderError):
    """The content model reaching the compiler violates its invariants."""


class LoadError(BuilderError):
    """A source document could not be read, parsed or validated."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ArchiveError(BuilderError):
    """The module archive could not be written."""


class ScaffoldError(BuilderError):
    """A sample record file could not be written."""
