from __future__ import annotations

import json
from typing import Any

from usa_cities.core.errors import MalformedRecordError
from usa_cities.models import Record
from usa_cities.parsers.base import BaseRecordParser


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ",".join(_as_text(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True)
    return str(value)


class JSONRecordParser(BaseRecordParser):
    """Parser for pre-serialized records: a JSON array of flat objects.

    Values are returned as strings so JSON-backed tables go through the same
    record conversion as delimited ones. null becomes "" and lists are
    comma-joined (the ZIP code sub-list format).
    """

    @property
    def name(self) -> str:
        return "json"

    def _parse_impl(self, content: str, **kwargs: Any) -> list[Record]:
        if not content.strip():
            return []

        try:
            payload = json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedRecordError(
                f"line {e.lineno}: invalid JSON: {e.msg}", line=e.lineno
            ) from e

        if not isinstance(payload, list):
            raise MalformedRecordError(
                f"expected an array of records, got {type(payload).__name__}", line=1
            )

        records: list[Record] = []
        for index, item in enumerate(payload):
            if not isinstance(item, dict):
                # Line numbers are 1-based positions in the array here
                self._repair(index + 1, "*", item, None, "skipped non-object entry")
                continue
            records.append({str(key): _as_text(value) for key, value in item.items()})
        return records
