"""Record parsers: delimited flat files and pre-serialized JSON records."""

from __future__ import annotations

from usa_cities.parsers.base import BaseRecordParser
from usa_cities.parsers.delimited import DelimitedParser, dump, parse
from usa_cities.parsers.factory import ParserFactory
from usa_cities.parsers.json_records import JSONRecordParser

__all__ = [
    "BaseRecordParser",
    "DelimitedParser",
    "JSONRecordParser",
    "ParserFactory",
    "dump",
    "parse",
]
