from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from importlib import resources
from pathlib import Path
from typing import Any, Union

from abstract_validation_base import ProcessLog

from usa_cities.core.constants import JSON_FILE_NAMES, TABLE_NAMES
from usa_cities.data.base import BaseTableSource
from usa_cities.models import GeoRecord, Record
from usa_cities.parsers.factory import ParserFactory

logger = logging.getLogger(__name__)


class StaticTableSource(BaseTableSource):
    """Table source backed by pre-serialized records, built once.

    All four tables are parsed and validated when the source is created;
    every load afterwards returns the stored tuple without further work.

    By default, loads the JSON files bundled with the package. A directory
    holding the same file names, or records already in memory, can be used
    instead.

    Example:
        >>> source = StaticTableSource()
        >>> source.load_states()[0].state_code
        'AL'

        >>> source = StaticTableSource(
        ...     records={"states": [{"state_id": "NY", "state_name": "New York"}]}
        ... )
    """

    def __init__(
        self,
        data_dir: Union[str, Path] | None = None,
        records: Mapping[str, Sequence[Mapping[str, Any]]] | None = None,
        *,
        strict: bool = False,
    ) -> None:
        """Initialize the static source and build every table.

        Args:
            data_dir: Directory containing cities.json, cities_basic.json,
                states.json and counties.json. If None, uses the bundled files.
            records: Pre-parsed records keyed by table name. Takes precedence
                over data_dir; tables missing from the mapping are empty.
            strict: If True, malformed records raise MalformedRecordError.

        Raises:
            DataUnavailableError: If a backing file is missing or unreadable.
        """
        super().__init__(strict=strict)
        self._data_dir = Path(data_dir) if data_dir is not None else None
        self._records = records
        self._tables: dict[str, tuple[tuple[GeoRecord, ...], ProcessLog]] = {}
        for table in TABLE_NAMES:
            self._tables[table] = super().read_table(table)
        logger.debug(
            "Static source ready: %s",
            ", ".join(f"{name}={len(rows)}" for name, (rows, _) in self._tables.items()),
        )

    def _load_records(self, table: str, process_log: ProcessLog) -> Sequence[Record]:
        if self._records is not None:
            return [
                {str(key): "" if value is None else value for key, value in row.items()}
                for row in self._records.get(table, ())
            ]

        file_name = JSON_FILE_NAMES[table]
        path = (
            self._data_dir / file_name
            if self._data_dir is not None
            else resources.files("usa_cities.data").joinpath(file_name)
        )
        parser = ParserFactory.create("json", strict=self.strict)
        records = parser.parse_file(path)
        process_log.cleaning.extend(parser.process_log.cleaning)
        return records

    def read_table(self, table: str) -> tuple[tuple[GeoRecord, ...], ProcessLog]:
        """Return a stored table and the repairs made when it was built.

        Raises:
            ValueError: If the table name is unknown.
        """
        if table not in self._tables:
            raise ValueError(
                f"Unknown table: {table}. Available tables: {', '.join(TABLE_NAMES)}"
            )
        return self._tables[table]
