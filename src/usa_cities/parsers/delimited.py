from __future__ import annotations

import csv
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from usa_cities.core.constants import DEFAULT_DELIMITER
from usa_cities.core.errors import MalformedRecordError
from usa_cities.models import Record
from usa_cities.parsers.base import BaseRecordParser


def check_delimiter(delimiter: str) -> str:
    """Validate a field delimiter.

    Raises:
        ValueError: If the delimiter is not a single character, or is a
            line break.
    """
    if len(delimiter) != 1 or delimiter in "\r\n":
        raise ValueError(f"delimiter must be a single non-newline character, got {delimiter!r}")
    return delimiter


class DelimitedParser(BaseRecordParser):
    """Parser for header-first delimited text (``City|State short|...``).

    The first line names the fields; header names are trimmed. Every later
    line is split on the same single-character delimiter, with no quoting or
    escaping, and each value is kept exactly as written. Empty lines at the
    end of the content are not records; empty lines in the body are.

    Short rows get "" for the missing trailing fields and extra fields on
    long rows are dropped, unless the parser is strict.

    Example:
        >>> parser = DelimitedParser()
        >>> parser.parse("state_id|state_name\\nNY|New York\\n")
        [{'state_id': 'NY', 'state_name': 'New York'}]
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER, *, strict: bool = False) -> None:
        """Initialize the parser.

        Args:
            delimiter: Default field delimiter, a single character.
            strict: If True, rows with the wrong field count raise.

        Raises:
            ValueError: If the delimiter is not a single character.
        """
        self.delimiter = check_delimiter(delimiter)
        super().__init__(strict=strict)

    @property
    def name(self) -> str:
        return "delimited"

    def _parse_impl(
        self,
        content: str,
        delimiter: str | None = None,
        **kwargs: Any,
    ) -> list[Record]:
        sep = check_delimiter(delimiter) if delimiter is not None else self.delimiter

        lines = [line.rstrip("\r") for line in content.split("\n")]
        while lines and not lines[-1]:
            lines.pop()
        if not lines:
            return []

        reader = csv.reader(lines, delimiter=sep, quoting=csv.QUOTE_NONE, quotechar=None)
        try:
            header = [name.strip() for name in next(reader) or [""]]
            records: list[Record] = []
            for values in reader:
                # csv yields [] for an empty line; that is one empty field
                records.append(self._fit_row(reader.line_num, header, values or [""], sep))
        except csv.Error as e:
            raise MalformedRecordError(
                f"line {reader.line_num}: {e}", line=reader.line_num
            ) from e
        return records

    def _fit_row(self, lineno: int, header: list[str], values: list[str], sep: str) -> Record:
        if len(values) < len(header):
            missing = header[len(values) :]
            self._repair(
                lineno,
                missing[0],
                sep.join(values),
                "",
                f"row has {len(values)} of {len(header)} fields; filled {len(missing)} with ''",
            )
            values = values + ["" for _ in missing]
        elif len(values) > len(header):
            extra = values[len(header) :]
            self._repair(
                lineno,
                "*",
                sep.join(extra),
                "",
                f"row has {len(values)} of {len(header)} fields; dropped {len(extra)}",
            )
            values = values[: len(header)]
        return dict(zip(header, values))


def parse(
    content: str,
    delimiter: str = DEFAULT_DELIMITER,
    *,
    strict: bool = False,
) -> list[Record]:
    """Parse delimited text with a throwaway parser.

    Args:
        content: Header line followed by data lines.
        delimiter: Field delimiter.
        strict: If True, rows with the wrong field count raise.

    Returns:
        Records keyed by header field, in source order.
    """
    return DelimitedParser(delimiter, strict=strict).parse(content)


def dump(
    records: Iterable[Mapping[str, Any]],
    delimiter: str = DEFAULT_DELIMITER,
    fields: Sequence[str] | None = None,
) -> str:
    """Serialize records back into delimited text.

    Args:
        records: Records to write.
        delimiter: Field delimiter.
        fields: Header order. Defaults to the keys of the first record.

    Returns:
        Header line and one line per record, each ending in a newline.
        Records without any fields produce an empty string.

    Raises:
        ValueError: If the delimiter is not a single character, or a value
            contains the delimiter or a line break.
    """
    check_delimiter(delimiter)
    rows = list(records)
    header = list(fields) if fields is not None else list(rows[0]) if rows else []
    if not header:
        return ""

    lines = [delimiter.join(header)]
    for row in rows:
        values = []
        for field in header:
            value = row.get(field, "")
            text = "" if value is None else str(value)
            if delimiter in text or "\n" in text or "\r" in text:
                raise ValueError(f"value for {field!r} cannot be written unquoted: {text!r}")
            values.append(text)
        lines.append(delimiter.join(values))
    return "\n".join(lines) + "\n"
