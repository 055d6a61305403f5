"""Shared pytest fixtures and Hypothesis configuration.

This module provides a small fixture dataset (as flat files and as an
in-memory static source), keeps USA_CITIES_* environment variables from
leaking into tests, and configures Hypothesis profiles.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from hypothesis import Verbosity, settings

from tests.fixture_data import FIXTURE_TEXTS
from usa_cities import (
    CityDatabase,
    DatabaseConfig,
    FlatFileTableSource,
    StaticTableSource,
    get_default_database,
    parse,
)

# Configure Hypothesis settings for the test suite
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, deadline=None, verbosity=Verbosity.verbose)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep USA_CITIES_* settings and the default database out of tests."""
    for name in (
        "USA_CITIES_MODE",
        "USA_CITIES_DATA_DIR",
        "USA_CITIES_DELIMITER",
        "USA_CITIES_STRICT",
        "USA_CITIES_CACHE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_default_database.cache_clear()
    yield
    get_default_database.cache_clear()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory holding the fixture tables as delimited files."""
    for file_name, text in FIXTURE_TEXTS.values():
        (tmp_path / file_name).write_text(text, encoding="utf-8")
    return tmp_path


@pytest.fixture
def flat_source(data_dir: Path) -> FlatFileTableSource:
    """On-demand source over the fixture files."""
    return FlatFileTableSource(data_dir)


@pytest.fixture
def static_source() -> StaticTableSource:
    """Static source over the fixture tables, built from parsed records."""
    return StaticTableSource(
        records={table: parse(text) for table, (_, text) in FIXTURE_TEXTS.items()}
    )


@pytest.fixture
def db(static_source: StaticTableSource) -> CityDatabase:
    """Database over the fixture tables."""
    return CityDatabase(static_source, config=DatabaseConfig())
