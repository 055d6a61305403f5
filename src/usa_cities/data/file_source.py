from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from importlib import resources
from pathlib import Path
from typing import Union

from abstract_validation_base import ProcessLog

from usa_cities.core.constants import DEFAULT_DELIMITER, FLAT_FILE_NAMES
from usa_cities.data.base import BaseTableSource
from usa_cities.models import Record
from usa_cities.parsers.base import SourcePath
from usa_cities.parsers.delimited import check_delimiter
from usa_cities.parsers.factory import ParserFactory

logger = logging.getLogger(__name__)


class FlatFileTableSource(BaseTableSource):
    """Table source that re-parses delimited files on every load.

    There is no caching here: each load_* call builds a new parser, reads
    and parses its file from scratch and returns a fresh tuple. Nothing is
    shared between loads, so concurrent loads from several threads are
    safe. Wrap the source in CachedTableSource (or hold on to the returned
    tables) when the same table is needed repeatedly.

    Example:
        >>> source = FlatFileTableSource()  # bundled us_*.txt files
        >>> source = FlatFileTableSource("/srv/geo", delimiter="|")
        >>> source = FlatFileTableSource(paths={"states": "/tmp/states.txt"})
        >>> rows, log = source.read_table("cities")  # with this load's repairs
    """

    def __init__(
        self,
        data_dir: Union[str, Path] | None = None,
        paths: Mapping[str, Union[str, Path]] | None = None,
        delimiter: str = DEFAULT_DELIMITER,
        *,
        strict: bool = False,
        parser_type: str = "delimited",
    ) -> None:
        """Initialize the flat-file source.

        Args:
            data_dir: Directory holding us_cities.txt, us_cities_basic.txt,
                us_states.txt and us_counties.txt. If None, uses the
                bundled files.
            paths: Per-table file paths, overriding data_dir for the
                tables they name.
            delimiter: Field delimiter used by every file.
            strict: If True, malformed rows raise MalformedRecordError.
            parser_type: ParserFactory name of the parser built for each
                load. It is called with delimiter and strict.

        Raises:
            ValueError: If the delimiter is not a single character or the
                parser type is not registered.
        """
        super().__init__(strict=strict)
        self._data_dir = Path(data_dir) if data_dir is not None else None
        self._paths = {table: Path(path) for table, path in (paths or {}).items()}
        self.delimiter = check_delimiter(delimiter)
        self.parser_type = parser_type
        # Unknown parser types fail here rather than on the first load
        ParserFactory.resolve(parser_type)

    def path_for(self, table: str) -> SourcePath:
        """Resolve the backing file for a table.

        Args:
            table: Table name.

        Returns:
            Filesystem path or bundled package resource.
        """
        if table in self._paths:
            return self._paths[table]
        file_name = FLAT_FILE_NAMES[table]
        if self._data_dir is not None:
            return self._data_dir / file_name
        return resources.files("usa_cities.data").joinpath(file_name)

    def _load_records(self, table: str, process_log: ProcessLog) -> Sequence[Record]:
        path = self.path_for(table)
        parser = ParserFactory.create(
            self.parser_type, delimiter=self.delimiter, strict=self.strict
        )
        logger.debug("Parsing %s with a new %s parser", path, self.parser_type)
        records = parser.parse_file(path)
        process_log.cleaning.extend(parser.process_log.cleaning)
        return records
