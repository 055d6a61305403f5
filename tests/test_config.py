from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixture_data import CITY_COUNT
from usa_cities import (
    DatabaseConfig,
    FlatFileTableSource,
    MalformedRecordError,
    StaticTableSource,
    TableSourceFactory,
)
from usa_cities.config import ON_DEMAND_MODE, STATIC_MODE


class TestDatabaseConfig:
    """Test environment-backed configuration."""

    def test_defaults(self) -> None:
        """Without environment settings, bundled static data is used."""
        config = DatabaseConfig()
        assert config.mode == STATIC_MODE
        assert config.data_dir is None
        assert config.delimiter == "|"
        assert config.strict is False
        assert config.cache_tables is True

    def test_on_demand_defaults_to_no_caching(self) -> None:
        """On-demand mode re-reads per query unless caching is requested."""
        assert DatabaseConfig(mode="on_demand").cache_tables is False
        assert DatabaseConfig(mode="on_demand", cache_tables=True).cache_tables is True

    @pytest.mark.parametrize("mode", ["on_demand", "ON_DEMAND", "on-demand", " On-Demand "])
    def test_mode_spellings(self, mode: str) -> None:
        """Mode names are normalized."""
        assert DatabaseConfig(mode=mode).mode == ON_DEMAND_MODE

    def test_unknown_mode(self) -> None:
        """Unknown modes are rejected."""
        with pytest.raises(ValueError, match="Unknown mode: lazy"):
            DatabaseConfig(mode="lazy")

    @pytest.mark.parametrize("delimiter", ["", "||", "\n"])
    def test_delimiter_must_be_one_character(self, delimiter: str) -> None:
        """Empty, multi-character and line-break delimiters are rejected."""
        with pytest.raises(ValueError, match="single non-newline character"):
            DatabaseConfig(delimiter=delimiter)

    def test_environment(self, monkeypatch: pytest.MonkeyPatch, data_dir: Path) -> None:
        """Every field can be set from the environment."""
        monkeypatch.setenv("USA_CITIES_MODE", "on_demand")
        monkeypatch.setenv("USA_CITIES_DATA_DIR", str(data_dir))
        monkeypatch.setenv("USA_CITIES_DELIMITER", ";")
        monkeypatch.setenv("USA_CITIES_STRICT", "1")
        monkeypatch.setenv("USA_CITIES_CACHE", "yes")

        config = DatabaseConfig()
        assert config.mode == ON_DEMAND_MODE
        assert config.data_dir == str(data_dir)
        assert config.delimiter == ";"
        assert config.strict is True
        assert config.cache_tables is True

    @pytest.mark.parametrize("value", ["0", "false", "FALSE", "no"])
    def test_false_flags(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        """0, false and no turn flags off."""
        monkeypatch.setenv("USA_CITIES_CACHE", value)
        monkeypatch.setenv("USA_CITIES_STRICT", value)
        config = DatabaseConfig()
        assert config.cache_tables is False
        assert config.strict is False

    def test_blank_cache_flag_uses_mode_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A blank USA_CITIES_CACHE behaves as unset."""
        monkeypatch.setenv("USA_CITIES_CACHE", "")
        assert DatabaseConfig().cache_tables is True
        assert DatabaseConfig(mode="on_demand").cache_tables is False

    def test_explicit_values_override_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Constructor arguments win over the environment."""
        monkeypatch.setenv("USA_CITIES_MODE", "on_demand")
        assert DatabaseConfig(mode="static").mode == STATIC_MODE


class TestCreateSource:
    """Test building table sources from configuration."""

    def test_static_bundled(self) -> None:
        """Static mode builds a StaticTableSource over the bundled data."""
        source = DatabaseConfig().create_source()
        assert isinstance(source, StaticTableSource)
        assert source.strict is False

    def test_on_demand_with_data_dir(self, data_dir: Path) -> None:
        """On-demand mode builds a FlatFileTableSource over data_dir."""
        config = DatabaseConfig(mode="on_demand", data_dir=str(data_dir))
        source = config.create_source()
        assert isinstance(source, FlatFileTableSource)
        assert len(source.load_cities()) == CITY_COUNT

    def test_strict_is_passed_through(self, data_dir: Path) -> None:
        """The strict flag reaches the source."""
        config = DatabaseConfig(mode="on_demand", data_dir=str(data_dir), strict=True)
        source = config.create_source()
        assert isinstance(source, FlatFileTableSource)
        assert source.strict is True
        with pytest.raises(MalformedRecordError):
            source.load_cities()

    def test_delimiter_is_passed_through(self, tmp_path: Path) -> None:
        """The delimiter reaches the flat-file parser."""
        (tmp_path / "us_states.txt").write_text("state_id;state_name\nNY;New York\n")
        config = DatabaseConfig(mode="on_demand", data_dir=str(tmp_path), delimiter=";")
        assert config.create_source().load_states()[0].state_name == "New York"

    def test_mode_is_resolved_through_factory(self, data_dir: Path) -> None:
        """The mode names a TableSourceFactory type, so overrides apply."""

        class TracingSource(FlatFileTableSource):
            pass

        TableSourceFactory.register("on_demand", TracingSource, replace=True)
        try:
            source = DatabaseConfig(mode="on-demand", data_dir=str(data_dir)).create_source()
            assert type(source) is TracingSource
        finally:
            TableSourceFactory.unregister("on_demand")
        source = DatabaseConfig(mode="on_demand", data_dir=str(data_dir)).create_source()
        assert type(source) is FlatFileTableSource
