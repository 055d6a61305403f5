"""Error classes with package identification.

Every error raised by this package derives from UsaCitiesError and carries a
context dict naming the package, so callers can tell our failures apart from
errors raised by pydantic or the standard library.
"""

from __future__ import annotations

from typing import Any

# Package identifier for error context
PACKAGE_NAME = "usa_cities"


class UsaCitiesError(Exception):
    """Base exception for usa_cities.

    Args:
        message: Human-readable error message.
        context: Additional context merged into the error context.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.context = {"package": PACKAGE_NAME, **(context or {})}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r}, context={self.context})"


class DataUnavailableError(UsaCitiesError):
    """A backing data source is missing or cannot be read.

    Raised at load time. Sources are static, so there is nothing to retry.
    """

    def __init__(
        self,
        source: str,
        reason: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.source = source
        self.reason = reason
        super().__init__(
            f"Data source unavailable: {source} ({reason})",
            {"source": source, **(context or {})},
        )


class MalformedRecordError(UsaCitiesError):
    """A row or field failed validation.

    Raised in strict mode for rows and fields the lenient default would
    repair, and in either mode for content that cannot be parsed at all
    (such as invalid JSON).
    """

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        field: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.line = line
        self.field = field
        self.errors_list: list[Any] = []
        super().__init__(message, {"line": line, "field": field, **(context or {})})

    @classmethod
    def from_validation_error(
        cls,
        error: Exception,
        *,
        line: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> MalformedRecordError:
        """Wrap a pydantic.ValidationError raised while building a record.

        Args:
            error: The ValidationError (or any exception) to wrap.
            line: Source line of the offending record, when known.
            context: Optional additional context.

        Returns:
            MalformedRecordError carrying the original error details.
        """
        from pydantic import ValidationError

        if isinstance(error, ValidationError):
            errors_list = error.errors()
            message = "; ".join(e.get("msg", str(e)) for e in errors_list)
            loc = errors_list[0].get("loc", ()) if errors_list else ()
            field = str(loc[0]) if loc else None
        else:
            errors_list = []
            message = str(error)
            field = None

        wrapped = cls(message, line=line, field=field, context=context)
        wrapped.errors_list = errors_list
        wrapped.__cause__ = error
        return wrapped

    def errors(self) -> list[Any]:
        """Get the list of wrapped validation errors."""
        return self.errors_list
