"""Error taxonomy for snapshot I/O and result rendering.

Every error names the operation that failed and, where one is known, the
file involved, so callers can report the failure without inspecting the
chained cause.  None of these are retried internally.
"""

from __future__ import annotations


class HashDifferError(Exception):
    """Base class for all errors raised by the hash engine."""

    def __init__(self, message: str, *, operation: str, path: str | None = None) -> None:
        self.operation = operation
        self.path = path
        location = f" ({path})" if path else ""
        super().__init__(f"{operation} failed{location}: {message}")


class ReadFailure(HashDifferError):
    """The snapshot source could not be read."""


class MalformedSnapshot(HashDifferError):
    """The snapshot source was read but does not decode into a valid Snapshot."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        path: str | None = None,
        errors: list[str] | None = None,
    ) -> None:
        self.errors = list(errors or [])
        super().__init__(message, operation=operation, path=path)


class WriteFailure(HashDifferError):
    """The destination could not be written."""


class IncompleteComparison(HashDifferError):
    """A projection needs data the comparison result does not carry.

    Raised when excluding removed targets from a result that was read back
    from its export, which does not record which targets survive.
    """


class UnsupportedOutputForm(HashDifferError):
    """A projection form was requested that the renderer does not know."""

    def __init__(self, form: str) -> None:
        self.form = form
        super().__init__(f"unsupported output format: {form!r}", operation="render")
