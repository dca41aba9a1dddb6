"""Exceptions raised by the extraction/reinjection engine.

Every failure here is fatal for the run: the on-disk state that caused it
will not change by retrying.  Untranslated text (a lookup miss) is not an
error and has no exception.
"""

from __future__ import annotations

from typing import Optional


class EngineError(Exception):
    """Base class for engine failures."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            extra = ", ".join(f"{k}={v}" for k, v in self.details.items()
                              if v is not None)
            if extra:
                return f"{self.message} ({extra})"
        return self.message


class SchemaViolation(EngineError):
    """A document does not have the shape its schema family requires."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 field: Optional[str] = None):
        super().__init__(message, {"file": file_path, "field": field})
        self.file_path = file_path
        self.field = field

    def in_file(self, file_path: str) -> "SchemaViolation":
        """Return a copy of this error bound to *file_path*."""
        return SchemaViolation(self.message, file_path, self.field)


class PoolMismatch(EngineError):
    """An original pool and its translation differ in line count."""

    def __init__(self, original_path: Optional[str],
                 translation_path: Optional[str],
                 original_count: int, translation_count: int):
        super().__init__(
            f"Pool line counts differ: {original_count} original lines, "
            f"{translation_count} translated lines",
            {"original": original_path, "translation": translation_path},
        )
        self.original_path = original_path
        self.translation_path = translation_path
        self.original_count = original_count
        self.translation_count = translation_count


class IOFailure(EngineError):
    """Reading or writing a file failed."""

    def __init__(self, message: str, file_path: str):
        super().__init__(message, {"file": file_path})
        self.file_path = file_path
