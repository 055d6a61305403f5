from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from usa_cities.core.factory import PluginFactory
from usa_cities.protocols import RecordParserProtocol


class ParserFactory(PluginFactory[RecordParserProtocol]):
    """Factory for record parsers.

    FlatFileTableSource builds one parser per load through this factory (by
    default "delimited"); StaticTableSource uses "json".

    Example:
        >>> parser = ParserFactory.create("delimited", delimiter="|")
        >>> parser = ParserFactory.create("json", strict=True)

        # Register a custom parser
        >>> ParserFactory.register("tsv", TabSeparatedParser)
        >>> source = FlatFileTableSource(parser_type="tsv")
    """

    _builtins: ClassVar[Mapping[str, str]] = {
        "delimited": "usa_cities.parsers.delimited:DelimitedParser",
        "json": "usa_cities.parsers.json_records:JSONRecordParser",
    }
    _default_type: ClassVar[str] = "delimited"
    _entity_name: ClassVar[str] = "parser"

    @classmethod
    def create(  # type: ignore[override]
        cls,
        parser_type: str | None = None,
        **kwargs: Any,
    ) -> RecordParserProtocol:
        """Create a parser instance.

        Args:
            parser_type: Type of parser to create. Defaults to "delimited".
            **kwargs: Arguments to pass to the parser constructor.

        Returns:
            Parser instance.

        Raises:
            ValueError: If the parser type is not registered.
        """
        return super().create(parser_type, **kwargs)
