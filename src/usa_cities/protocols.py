from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from abstract_validation_base import ProcessLog

    from usa_cities.models import BasicCity, City, County, Record, State


@runtime_checkable
class RecordParserProtocol(Protocol):
    """Protocol for record parsers.

    Implementations turn the text of a backing source into an ordered list
    of records keyed by field name, recording repairs in process_log.
    """

    strict: bool
    process_log: ProcessLog

    def parse(self, content: str, **kwargs: Any) -> list[Record]:
        """Parse source text.

        Args:
            content: Full text of the source.

        Returns:
            Records in source order.
        """
        ...

    def parse_file(self, path: Any, **kwargs: Any) -> list[Record]:
        """Read and parse a file.

        Args:
            path: Location of the source.

        Returns:
            Records in source order.

        Raises:
            DataUnavailableError: If the source cannot be read.
        """
        ...


@runtime_checkable
class TableSourceProtocol(Protocol):
    """Protocol for table sources.

    Implementations materialize the four tables, either from data held in
    memory (static) or by re-reading a backing source on every call.
    """

    def load_cities(self) -> tuple[City, ...]:
        """Load the extended-schema cities table."""
        ...

    def load_basic_cities(self) -> tuple[BasicCity, ...]:
        """Load the basic-schema cities table."""
        ...

    def load_states(self) -> tuple[State, ...]:
        """Load the states table."""
        ...

    def load_counties(self) -> tuple[County, ...]:
        """Load the counties table."""
        ...
