from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from usa_cities.core.factory import PluginFactory
from usa_cities.protocols import TableSourceProtocol


class TableSourceFactory(PluginFactory[TableSourceProtocol]):
    """Factory for table sources, keyed by loading mode.

    Built-in types:
        - "static": StaticTableSource, pre-serialized records built once
        - "on_demand": FlatFileTableSource, delimited files re-parsed per load
        - "flatfile": same as "on_demand"
        - "cached": CachedTableSource, wraps the ``source`` keyword argument

    DatabaseConfig.create_source builds its source by passing its mode here.

    Example:
        >>> source = TableSourceFactory.create("static")
        >>> source = TableSourceFactory.create("on-demand", data_dir="/srv/geo")
        >>> source = TableSourceFactory.create(
        ...     "cached", source=TableSourceFactory.create("flatfile")
        ... )
    """

    _builtins: ClassVar[Mapping[str, str]] = {
        "static": "usa_cities.data.static_source:StaticTableSource",
        "on_demand": "usa_cities.data.file_source:FlatFileTableSource",
        "flatfile": "usa_cities.data.file_source:FlatFileTableSource",
        "cached": "usa_cities.data.cache:CachedTableSource",
    }
    _default_type: ClassVar[str] = "static"
    _entity_name: ClassVar[str] = "table source"

    @classmethod
    def create(  # type: ignore[override]
        cls,
        source_type: str | None = None,
        **kwargs: Any,
    ) -> TableSourceProtocol:
        """Create a table source instance.

        Args:
            source_type: Type of source to create. Defaults to "static".
            **kwargs: Arguments to pass to the source constructor.

        Returns:
            Table source instance.

        Raises:
            ValueError: If the source type is not registered.
        """
        return super().create(source_type, **kwargs)
