from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from abstract_validation_base import ProcessLog
from pydantic import ValidationError

from usa_cities.core.constants import BASIC_CITIES, CITIES, COUNTIES, STATES, TABLE_NAMES
from usa_cities.core.errors import MalformedRecordError
from usa_cities.models import BasicCity, City, County, GeoRecord, Record, State

logger = logging.getLogger(__name__)

# Record model for each table
TABLE_MODELS: dict[str, type[GeoRecord]] = {
    CITIES: City,
    BASIC_CITIES: BasicCity,
    STATES: State,
    COUNTIES: County,
}


class BaseTableSource(ABC):
    """Abstract base class for table sources.

    Subclasses provide raw records per table; this class turns them into
    immutable tuples of typed records. Tables are tuples so a caller can
    never corrupt a source by mutating what a load returned.

    Every load gets its own ProcessLog, so nothing accumulates on the
    source between loads.
    """

    def __init__(self, *, strict: bool = False) -> None:
        """Initialize the table source.

        Args:
            strict: If True, malformed rows and fields raise
                MalformedRecordError instead of degrading.
        """
        self.strict = strict

    @abstractmethod
    def _load_records(self, table: str, process_log: ProcessLog) -> Sequence[Record]:
        """Read the raw records for one table.

        Args:
            table: One of the TABLE_NAMES constants.
            process_log: Log for this load; parser repairs go in cleaning.

        Returns:
            Raw records in source order.

        Raises:
            DataUnavailableError: If the backing source cannot be read.
        """
        ...

    def _build_table(
        self, table: str, records: Sequence[Record], process_log: ProcessLog
    ) -> tuple[GeoRecord, ...]:
        """Convert raw records into typed records, logging field repairs.

        Raises:
            MalformedRecordError: If a record fails validation.
        """
        model = TABLE_MODELS[table]
        rows: list[GeoRecord] = []
        for index, record in enumerate(records, start=1):
            try:
                rows.append(
                    model.from_record(
                        record, strict=self.strict, process_log=process_log, position=index
                    )
                )
            except ValidationError as e:
                raise MalformedRecordError.from_validation_error(
                    e, line=index, context={"table": table}
                ) from e
        return tuple(rows)

    def read_table(self, table: str) -> tuple[tuple[GeoRecord, ...], ProcessLog]:
        """Load a table together with the repairs made while loading it.

        Args:
            table: One of "cities", "basic_cities", "states", "counties".

        Returns:
            Tuple of (rows, process log for this load).

        Raises:
            ValueError: If the table name is unknown.
        """
        if table not in TABLE_NAMES:
            raise ValueError(
                f"Unknown table: {table}. Available tables: {', '.join(TABLE_NAMES)}"
            )
        process_log = ProcessLog()
        rows = self._build_table(table, self._load_records(table, process_log), process_log)
        if process_log.cleaning:
            logger.warning(
                "Repaired %d malformed values while loading %s table",
                len(process_log.cleaning),
                table,
            )
        logger.debug("Loaded %d rows into %s table", len(rows), table)
        return rows, process_log

    def _load_table(self, table: str) -> tuple[GeoRecord, ...]:
        return self.read_table(table)[0]

    def load_cities(self) -> tuple[City, ...]:
        """Load the extended-schema cities table.

        Returns:
            Cities in source order.
        """
        return self._load_table(CITIES)  # type: ignore[return-value]

    def load_basic_cities(self) -> tuple[BasicCity, ...]:
        """Load the basic-schema cities table.

        Returns:
            Cities in source order.
        """
        return self._load_table(BASIC_CITIES)  # type: ignore[return-value]

    def load_states(self) -> tuple[State, ...]:
        """Load the states table.

        Returns:
            States in source order.
        """
        return self._load_table(STATES)  # type: ignore[return-value]

    def load_counties(self) -> tuple[County, ...]:
        """Load the counties table.

        Returns:
            Counties in source order.
        """
        return self._load_table(COUNTIES)  # type: ignore[return-value]

    def load_table(self, table: str) -> tuple[GeoRecord, ...]:
        """Load a table by name.

        Args:
            table: One of "cities", "basic_cities", "states", "counties".

        Raises:
            ValueError: If the table name is unknown.
        """
        loaders = {
            CITIES: self.load_cities,
            BASIC_CITIES: self.load_basic_cities,
            STATES: self.load_states,
            COUNTIES: self.load_counties,
        }
        if table not in loaders:
            raise ValueError(f"Unknown table: {table}. Available tables: {', '.join(loaders)}")
        return loaders[table]()
