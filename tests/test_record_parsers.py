from __future__ import annotations

from pathlib import Path

import pytest

from usa_cities import DataUnavailableError, MalformedRecordError
from usa_cities.parsers import DelimitedParser, JSONRecordParser, dump, parse


class TestDelimitedParser:
    """Test DelimitedParser and the parse() helper."""

    def test_header_defines_keys_in_order(self) -> None:
        """Header fields are trimmed and become the record keys, in order."""
        records = parse(" state_id | state_name \nNY|New York\n")
        assert records == [{"state_id": "NY", "state_name": "New York"}]
        assert list(records[0]) == ["state_id", "state_name"]

    def test_header_order_is_dynamic(self) -> None:
        """Values map by header position, not by a fixed schema."""
        records = parse("state_name|state_id\nTexas|TX\n")
        assert records[0]["state_id"] == "TX"
        assert records[0]["state_name"] == "Texas"

    def test_values_are_kept_as_written(self) -> None:
        """Only header names are trimmed; values keep their spaces."""
        assert parse(" a | b \n x |y \n") == [{"a": " x ", "b": "y "}]

    def test_quotes_and_backslashes_are_literal(self) -> None:
        """There is no quoting or escaping."""
        records = parse('a|b\n"x"|it\'s \\ ok\n')
        assert records == [{"a": '"x"', "b": "it's \\ ok"}]

    def test_short_row_fills_empty_strings(self) -> None:
        """Missing trailing fields become empty strings."""
        records = parse("a|b|c\n1\n1|2\n")
        assert records == [
            {"a": "1", "b": "", "c": ""},
            {"a": "1", "b": "2", "c": ""},
        ]

    def test_long_row_drops_extra_fields(self) -> None:
        """Fields beyond the header are discarded."""
        records = parse("a|b\n1|2|3|4\n")
        assert records == [{"a": "1", "b": "2"}]

    def test_trailing_newline_produces_no_record(self) -> None:
        """Empty trailing lines are not records."""
        assert len(parse("a|b\n1|2\n\n\n")) == 1
        assert len(parse("a|b\n1|2\r\n\r\n")) == 1
        assert len(parse("a|b\n1|2")) == 1

    def test_blank_lines_in_body_are_records(self) -> None:
        """Only trailing empty lines are dropped; body lines are always rows."""
        assert parse("a\n1\n\n   \n3\n") == [{"a": "1"}, {"a": ""}, {"a": "   "}, {"a": "3"}]
        assert parse("a|b\n1|2\n\n3|4\n") == [
            {"a": "1", "b": "2"},
            {"a": "", "b": ""},
            {"a": "3", "b": "4"},
        ]

    def test_blank_body_line_is_short_in_strict_mode(self) -> None:
        """A blank body line in a multi-column table is a short row."""
        with pytest.raises(MalformedRecordError) as exc_info:
            parse("a|b\n1|2\n\n3|4\n", strict=True)
        assert exc_info.value.line == 3

    def test_crlf_line_endings(self) -> None:
        """Windows line endings do not leak into the last field."""
        records = parse("a|b\r\n1|2\r\n")
        assert records == [{"a": "1", "b": "2"}]

    def test_empty_content(self) -> None:
        """Empty content and header-only content give no records."""
        assert parse("") == []
        assert parse("a|b\n") == []

    def test_custom_delimiter(self) -> None:
        """Any single character can be the delimiter; the default is a pipe."""
        assert parse("a,b\n1,2\n", delimiter=",") == [{"a": "1", "b": "2"}]
        assert DelimitedParser(",").parse("a,b\n1,2\n") == [{"a": "1", "b": "2"}]
        assert DelimitedParser().parse("a,b\n1,2\n") == [{"a,b": "1,2"}]

    def test_delimiter_override_per_call(self) -> None:
        """A delimiter passed to parse() overrides the parser default."""
        parser = DelimitedParser("|")
        assert parser.parse("a\tb\n1\t2\n", delimiter="\t") == [{"a": "1", "b": "2"}]

    @pytest.mark.parametrize("delimiter", ["", "||", "\n", "\r"])
    def test_delimiter_must_be_one_character(self, delimiter: str) -> None:
        """Delimiters are single, non-newline characters."""
        with pytest.raises(ValueError, match="single non-newline character"):
            DelimitedParser(delimiter)
        with pytest.raises(ValueError):
            DelimitedParser().parse("a|b\n1|2\n", delimiter=delimiter)
        with pytest.raises(ValueError):
            dump([{"a": "1"}], delimiter=delimiter)

    def test_repairs_are_logged(self) -> None:
        """Lenient repairs are recorded in the process log and stats."""
        parser = DelimitedParser()
        parser.parse("a|b|c\n1|2|3\n1\n1|2|3|4\n")

        assert parser.stats == {"parse_count": 1, "record_count": 3, "repair_count": 2}
        cleaning = parser.process_log.cleaning
        assert len(cleaning) == 2
        assert cleaning[0].field == "b"
        assert cleaning[0].context["line"] == 3
        assert cleaning[1].context["line"] == 4
        assert parser.process_log.errors == []

    def test_reset_stats(self) -> None:
        """reset_stats clears counters and the process log."""
        parser = DelimitedParser()
        parser.parse("a|b\n1\n")
        parser.reset_stats()
        assert parser.stats == {"parse_count": 0, "record_count": 0, "repair_count": 0}
        assert parser.process_log.cleaning == []

    def test_strict_short_row_raises(self) -> None:
        """Strict mode rejects short rows with the line number."""
        parser = DelimitedParser(strict=True)
        with pytest.raises(MalformedRecordError) as exc_info:
            parser.parse("a|b|c\n1|2|3\n1|2\n")
        assert exc_info.value.line == 3
        assert exc_info.value.field == "c"
        assert len(parser.process_log.errors) == 1

    def test_strict_long_row_raises(self) -> None:
        """Strict mode rejects long rows."""
        with pytest.raises(MalformedRecordError):
            parse("a|b\n1|2|3\n", strict=True)

    def test_strict_accepts_well_formed_input(self) -> None:
        """Strict mode parses well-formed input normally."""
        assert parse("a|b\n1|2\n", strict=True) == [{"a": "1", "b": "2"}]
        assert parse("a\nx\n\nz\n", strict=True) == [{"a": "x"}, {"a": ""}, {"a": "z"}]

    def test_parse_file(self, tmp_path: Path) -> None:
        """parse_file reads UTF-8 files."""
        path = tmp_path / "states.txt"
        path.write_text("state_id|state_name\nPR|Puerto Rico\n", encoding="utf-8")
        assert DelimitedParser().parse_file(path) == [
            {"state_id": "PR", "state_name": "Puerto Rico"}
        ]
        assert DelimitedParser().parse_file(str(path))[0]["state_id"] == "PR"

    def test_parse_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises DataUnavailableError naming the source."""
        missing = tmp_path / "nope.txt"
        with pytest.raises(DataUnavailableError) as exc_info:
            DelimitedParser().parse_file(missing)
        assert exc_info.value.source == str(missing)
        assert exc_info.value.context["package"] == "usa_cities"

    def test_results_are_independent(self) -> None:
        """Each parse returns new record objects."""
        parser = DelimitedParser()
        first = parser.parse("a|b\n1|2\n")
        second = parser.parse("a|b\n1|2\n")
        assert first == second
        assert first is not second
        first[0]["a"] = "changed"
        assert second[0]["a"] == "1"


class TestDump:
    """Test serializing records back to delimited text."""

    def test_round_trip(self) -> None:
        """Parsing and dumping well-formed text reproduces it."""
        text = "City|State short\nTroy|NY\nSpringfield|IL\n"
        assert dump(parse(text)) == text

    def test_round_trip_keeps_edge_whitespace(self) -> None:
        """Leading and trailing spaces in values survive a round trip."""
        text = "a|b\n x |y\n  |  \n"
        assert dump(parse(text)) == text

    def test_round_trip_keeps_empty_single_column_rows(self) -> None:
        """An empty value in a one-column table is still a row."""
        records = [{"a": "x"}, {"a": ""}, {"a": "z"}]
        assert dump(records) == "a\nx\n\nz\n"
        assert parse(dump(records)) == records

    def test_field_order(self) -> None:
        """Explicit fields control the column order and fill gaps."""
        records = [{"b": "2", "a": "1"}, {"a": "3"}]
        assert dump(records, fields=["a", "b"]) == "a|b\n1|2\n3|\n"

    def test_header_only(self) -> None:
        """With fields but no records, only the header is written."""
        assert dump([], fields=["a", "b"]) == "a|b\n"
        assert dump([]) == ""

    def test_rejects_delimiter_in_value(self) -> None:
        """Values that would need quoting cannot be written."""
        with pytest.raises(ValueError):
            dump([{"a": "x|y"}])
        with pytest.raises(ValueError):
            dump([{"a": "x\ny"}])


class TestJSONRecordParser:
    """Test parsing pre-serialized JSON records."""

    def test_values_become_strings(self) -> None:
        """Scalars are stringified, null is empty and lists are comma-joined."""
        records = JSONRecordParser().parse(
            '[{"city_ascii": "Troy", "lat": 42.7354, "population": 49154,'
            ' "density": null, "zips": ["12180", "12181"]}]'
        )
        assert records == [
            {
                "city_ascii": "Troy",
                "lat": "42.7354",
                "population": "49154",
                "density": "",
                "zips": "12180,12181",
            }
        ]

    def test_empty_content(self) -> None:
        """Blank content is an empty table."""
        assert JSONRecordParser().parse("  ") == []
        assert JSONRecordParser().parse("[]") == []

    def test_invalid_json(self) -> None:
        """Invalid JSON is malformed content, reported with its line."""
        with pytest.raises(MalformedRecordError, match="invalid JSON") as exc_info:
            JSONRecordParser().parse('[\n  {"state_id": "NY",\n')
        assert exc_info.value.line == 3

    def test_non_array_payload(self) -> None:
        """The payload must be an array of records."""
        with pytest.raises(MalformedRecordError, match="expected an array"):
            JSONRecordParser().parse('{"state_id": "NY"}')

    def test_invalid_json_file(self, tmp_path: Path) -> None:
        """A readable file holding bad JSON is malformed, not unavailable."""
        path = tmp_path / "states.json"
        path.write_text("not json", encoding="utf-8")
        with pytest.raises(MalformedRecordError):
            JSONRecordParser().parse_file(path)

    def test_non_object_entries_skipped(self) -> None:
        """Lenient mode skips entries that are not objects."""
        parser = JSONRecordParser()
        records = parser.parse('[{"state_id": "NY"}, 5, {"state_id": "CA"}]')
        assert [r["state_id"] for r in records] == ["NY", "CA"]
        assert parser.stats["repair_count"] == 1

    def test_non_object_entries_strict(self) -> None:
        """Strict mode rejects entries that are not objects."""
        with pytest.raises(MalformedRecordError):
            JSONRecordParser(strict=True).parse('[{"state_id": "NY"}, "CA"]')
