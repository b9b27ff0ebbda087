"""Exceptions raised while building schemas and transforming records."""

from __future__ import annotations


class TransmuteError(Exception):
    """Base class for all transmute errors."""


class SchemaError(TransmuteError, ValueError):
    """A schema entry could not be turned into a rule."""


class InvalidSourceError(TransmuteError, ValueError):
    """The source object passed to a transformation is missing."""


class MissingFieldError(TransmuteError, LookupError):
    """A directly mapped source field is absent under the ``error`` policy."""

    def __init__(self, target: str, field: str) -> None:
        super().__init__(f"Source field '{field}' for target '{target}' is missing.")
        self.target = target
        self.field = field
