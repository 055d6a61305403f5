from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any, Union

from abstract_validation_base import ProcessEntry, ProcessLog

from usa_cities.core.errors import DataUnavailableError, MalformedRecordError
from usa_cities.models import Record

logger = logging.getLogger(__name__)

SourcePath = Union[str, os.PathLike, Traversable]


class BaseRecordParser(ABC):
    """Abstract base class for record parsers.

    Provides source reading, repair/error bookkeeping and statistics.
    Subclasses implement _parse_impl, which turns raw text into records.

    Lenient parsers repair malformed rows and record each repair in
    ``process_log.cleaning``. Strict parsers record the problem in
    ``process_log.errors`` and raise MalformedRecordError.
    """

    def __init__(self, *, strict: bool = False) -> None:
        """Initialize the parser.

        Args:
            strict: If True, malformed rows raise instead of being repaired.
        """
        self.strict = strict
        self.process_log = ProcessLog()
        self._parse_count = 0
        self._record_count = 0
        self._repair_count = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this parser implementation."""
        ...

    @abstractmethod
    def _parse_impl(self, content: str, **kwargs: Any) -> list[Record]:
        """Parse raw text into records.

        Args:
            content: Full text of the source.

        Returns:
            Records in source order.
        """
        ...

    def parse(self, content: str, **kwargs: Any) -> list[Record]:
        """Parse raw text into a list of records.

        Args:
            content: Full text of the source.
            **kwargs: Parser-specific options.

        Returns:
            A new list of records in source order.

        Raises:
            MalformedRecordError: In strict mode, for malformed rows.
        """
        self._parse_count += 1
        records = self._parse_impl(content, **kwargs)
        self._record_count += len(records)
        logger.debug("%s parser produced %d records", self.name, len(records))
        return records

    def parse_file(self, path: SourcePath, **kwargs: Any) -> list[Record]:
        """Read a file (or package resource) and parse it.

        Args:
            path: Filesystem path or importlib.resources Traversable.
            **kwargs: Parser-specific options.

        Returns:
            Records in source order.

        Raises:
            DataUnavailableError: If the source cannot be read.
        """
        source = Path(path) if isinstance(path, (str, os.PathLike)) else path
        try:
            content = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DataUnavailableError(str(path), str(e)) from e
        logger.debug("Read %d characters from %s", len(content), path)
        return self.parse(content, **kwargs)

    def _repair(
        self,
        line: int,
        field: str,
        original: Any,
        repaired: Any,
        reason: str,
    ) -> None:
        """Record a lenient repair, or raise if the parser is strict."""
        if self.strict:
            self.process_log.errors.append(
                ProcessEntry(
                    entry_type="error",
                    field=field,
                    message=reason,
                    original_value=str(original),
                    context={"line": line},
                )
            )
            raise MalformedRecordError(f"line {line}: {reason}", line=line, field=field)

        self._repair_count += 1
        logger.debug("Repaired line %d (%s): %s", line, field, reason)
        self.process_log.cleaning.append(
            ProcessEntry(
                entry_type="cleaning",
                field=field,
                message=reason,
                original_value=str(original),
                new_value=str(repaired) if repaired is not None else None,
                context={"line": line, "operation_type": "lenient_repair"},
            )
        )

    @property
    def stats(self) -> dict[str, int]:
        """Get parsing statistics.

        Returns:
            Dict with parse_count, record_count and repair_count.
        """
        return {
            "parse_count": self._parse_count,
            "record_count": self._record_count,
            "repair_count": self._repair_count,
        }

    def reset_stats(self) -> None:
        """Reset statistics and clear the process log."""
        self._parse_count = 0
        self._record_count = 0
        self._repair_count = 0
        self.process_log = ProcessLog()
