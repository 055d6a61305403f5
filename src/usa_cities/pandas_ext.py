from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Union

from usa_cities.models import GeoRecord

if TYPE_CHECKING:
    import pandas as pd


def _row(record: Union[GeoRecord, Mapping[str, Any]]) -> dict[str, Any]:
    row = record.model_dump() if isinstance(record, GeoRecord) else dict(record)
    # Keep the column scalar so it filters and exports like the flat files
    zip_codes = row.get("zip_codes")
    if isinstance(zip_codes, (tuple, list)):
        row["zip_codes"] = ",".join(zip_codes)
    return row


def records_to_dataframe(
    records: Iterable[Union[GeoRecord, Mapping[str, Any]]],
) -> pd.DataFrame:
    """Build a DataFrame from table records.

    Args:
        records: Typed records (City, State, ...) or raw parsed records.

    Returns:
        DataFrame with one row per record and one column per field, in
        field order. zip_codes becomes a comma-joined string column.

    Example:
        >>> from usa_cities import get_cities_by_state
        >>> df = records_to_dataframe(get_cities_by_state("TX"))
        >>> df[["city_name", "population"]].head()
    """
    import pandas as pd

    rows = [_row(record) for record in records]
    return pd.DataFrame.from_records(rows)
