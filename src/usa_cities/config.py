from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional

from usa_cities.core.constants import DEFAULT_DELIMITER
from usa_cities.core.factory import normalize_name
from usa_cities.parsers.delimited import check_delimiter
from usa_cities.protocols import TableSourceProtocol

STATIC_MODE = "static"
ON_DEMAND_MODE = "on_demand"
MODES: tuple[str, ...] = (STATIC_MODE, ON_DEMAND_MODE)


def _env_flag(name: str, default: str = "1") -> bool:
    value = os.getenv(name, default)
    return value.lower() not in {"0", "false", "no"}


def _env_optional_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return _env_flag(name)


@dataclass
class DatabaseConfig:
    """Configuration for building a CityDatabase.

    Every field defaults to an environment variable so deployments can switch
    data location or loading mode without code changes:

        USA_CITIES_MODE       "static" (default) or "on_demand"
        USA_CITIES_DATA_DIR   directory with the data files (default: bundled)
        USA_CITIES_DELIMITER  flat-file delimiter, one character (default: "|")
        USA_CITIES_STRICT     fail on malformed rows (default: off)
        USA_CITIES_CACHE      keep loaded tables on the database (default: on in
                              static mode, off in on_demand mode)
    """

    mode: str = field(default_factory=lambda: os.getenv("USA_CITIES_MODE", STATIC_MODE))
    data_dir: Optional[str] = field(default_factory=lambda: os.getenv("USA_CITIES_DATA_DIR"))
    delimiter: str = field(
        default_factory=lambda: os.getenv("USA_CITIES_DELIMITER", DEFAULT_DELIMITER)
    )
    strict: bool = field(default_factory=lambda: _env_flag("USA_CITIES_STRICT", "0"))
    cache_tables: Optional[bool] = field(
        default_factory=lambda: _env_optional_flag("USA_CITIES_CACHE")
    )

    def __post_init__(self) -> None:
        self.mode = normalize_name(self.mode)
        if self.mode not in MODES:
            raise ValueError(f"Unknown mode: {self.mode}. Available modes: {', '.join(MODES)}")
        check_delimiter(self.delimiter)
        if self.cache_tables is None:
            # On-demand mode re-parses per query unless caching is asked for
            self.cache_tables = self.mode == STATIC_MODE

    def create_source(self) -> TableSourceProtocol:
        """Build the table source this configuration describes.

        Returns:
            StaticTableSource in static mode, FlatFileTableSource otherwise.

        Raises:
            DataUnavailableError: If a static source cannot read its data.
        """
        from usa_cities.data import TableSourceFactory

        options: dict[str, Any] = {"data_dir": self.data_dir or None, "strict": self.strict}
        if self.mode == ON_DEMAND_MODE:
            options["delimiter"] = self.delimiter
        return TableSourceFactory.create(self.mode, **options)
