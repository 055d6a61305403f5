"""Typed, immutable records for the cities, states and counties tables.

Each model accepts three spellings of its keys: the Python field name, the
flat-file header name (``State short``) and the pre-serialized JSON key
(``state_id``). Conversion from raw string fields is lenient by default;
pass ``context={"strict": True}`` to model_validate (or use
``from_record(..., strict=True)``) to reject malformed values instead.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, Self

from abstract_validation_base import ProcessEntry, ProcessLog
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from usa_cities.core.normalize import split_zip_codes

_STATE_CODE_RE = re.compile(r"[A-Z]{2}")


def _is_strict(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get("strict"))


def _malformed(field: str, message: str, value: Any) -> PydanticCustomError:
    return PydanticCustomError(
        "malformed_field",
        "{field}: " + message,
        {"field": field, "value": str(value)},
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _record_repair(
    info: ValidationInfo, field: str, original: Any, repaired: Any, reason: str
) -> None:
    """Note a lenient repair in the process log passed in the validation context."""
    context = info.context or {}
    process_log = context.get("process_log")
    if process_log is None:
        return
    process_log.cleaning.append(
        ProcessEntry(
            entry_type="cleaning",
            field=field,
            message=reason,
            original_value=str(original),
            new_value=str(repaired) if repaired is not None else None,
            context={"record": context.get("position"), "operation_type": "lenient_repair"},
        )
    )


class GeoRecord(BaseModel):
    """Base for all table records: frozen, ignores unknown keys."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        *,
        strict: bool = False,
        process_log: ProcessLog | None = None,
        position: int | None = None,
    ) -> Self:
        """Build a model from a parsed record.

        Values are kept as written; only the state code and the numeric and
        ZIP code fields are cleaned up.

        Args:
            record: Mapping of field name to raw value.
            strict: If True, malformed fields raise instead of degrading.
            process_log: Receives a cleaning entry for each lenient repair.
            position: 1-based position of the record in its table, for the log.

        Returns:
            Instance of the calling model class.

        Raises:
            pydantic.ValidationError: In strict mode, for malformed fields.
        """
        return cls.model_validate(
            dict(record),
            context={"strict": strict, "process_log": process_log, "position": position},
        )


class _StateFields(GeoRecord):
    state_code: str = Field(
        default="",
        validation_alias=AliasChoices("state_code", "state_id", "State short"),
    )
    state_name: str = Field(
        default="",
        validation_alias=AliasChoices("state_name", "State full"),
    )

    @field_validator("state_code", mode="before")
    @classmethod
    def _clean_state_code(cls, value: Any, info: ValidationInfo) -> str:
        code = _text(value).upper()
        if not code or _STATE_CODE_RE.fullmatch(code):
            return code
        if _is_strict(info):
            raise _malformed("state_code", "expected two ASCII letters, got {value}", value)
        _record_repair(info, "state_code", value, "", "not a two-letter state code; cleared")
        return ""


class State(_StateFields):
    """A U.S. state, district or territory."""


class County(_StateFields):
    """A county and the state it belongs to."""

    county_name: str = Field(
        default="",
        validation_alias=AliasChoices("county_name", "County"),
    )


class BasicCity(_StateFields):
    """City record in the basic schema (no geography, with an alias)."""

    city_name: str = Field(
        default="",
        validation_alias=AliasChoices("city_name", "city_ascii", "City"),
    )
    county_name: str = Field(
        default="",
        validation_alias=AliasChoices("county_name", "County"),
    )
    alias: str = Field(
        default="",
        validation_alias=AliasChoices("alias", "city_alias", "City alias"),
    )


class City(_StateFields):
    """City record in the extended schema.

    Numeric fields are None when the source value is missing or cannot be
    parsed (lenient mode). Cities without both coordinates never match a
    proximity query.
    """

    city_name: str = Field(
        default="",
        validation_alias=AliasChoices("city_name", "city_ascii", "City"),
    )
    county_name: str = Field(
        default="",
        validation_alias=AliasChoices("county_name", "County"),
    )
    zip_codes: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("zip_codes", "zips", "ZIP codes"),
    )
    latitude: float | None = Field(
        default=None,
        validation_alias=AliasChoices("latitude", "lat", "Latitude"),
    )
    longitude: float | None = Field(
        default=None,
        validation_alias=AliasChoices("longitude", "lng", "Longitude"),
    )
    population: int | None = Field(
        default=None,
        validation_alias=AliasChoices("population", "Population"),
    )
    density: float | None = Field(
        default=None,
        validation_alias=AliasChoices("density", "Density"),
    )
    timezone: str = Field(
        default="",
        validation_alias=AliasChoices("timezone", "Timezone"),
    )

    @field_validator("zip_codes", mode="before")
    @classmethod
    def _split_zip_codes(cls, value: Any, info: ValidationInfo) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            parts = split_zip_codes(value)
        else:
            parts = tuple(_text(part) for part in value if _text(part))

        bad = [part for part in parts if not part.isdigit()]
        if bad:
            if _is_strict(info):
                raise _malformed("zip_codes", "non-numeric ZIP code {value}", bad[0])
            parts = tuple(part for part in parts if part.isdigit())
            reason = f"dropped {len(bad)} non-numeric ZIP codes"
            _record_repair(info, "zip_codes", value, ",".join(parts), reason)
        return parts

    @field_validator("latitude", "longitude", "density", mode="before")
    @classmethod
    def _parse_float(cls, value: Any, info: ValidationInfo) -> float | None:
        text = _text(value)
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            number = math.nan
        if math.isfinite(number):
            return number
        if _is_strict(info):
            raise _malformed(str(info.field_name), "not a finite number: {value}", value)
        _record_repair(info, str(info.field_name), value, None, "not a finite number; cleared")
        return None

    @field_validator("population", mode="before")
    @classmethod
    def _parse_population(cls, value: Any, info: ValidationInfo) -> int | None:
        text = _text(value)
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            number = math.nan
        if math.isfinite(number) and number.is_integer():
            return int(number)
        if _is_strict(info):
            raise _malformed("population", "not an integer: {value}", value)
        _record_repair(info, "population", value, None, "not an integer; cleared")
        return None

    @property
    def has_coordinates(self) -> bool:
        """True when both latitude and longitude parsed."""
        return self.latitude is not None and self.longitude is not None
