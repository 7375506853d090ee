from __future__ import annotations

import math
import struct
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

KELVIN_OFFSET = 273
FLOAT32_MAX = 3.4028234663852886e38


def to_float32(value: float) -> float:
    """Round a double to the nearest single-precision value.

    Raises ``ValueError`` for NaN/infinity and ``OverflowError`` when the
    value does not fit in single precision.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot narrow non-finite value {value!r}")
    return struct.unpack("<f", struct.pack("<f", value))[0]


class LookupErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    UPSTREAM_FAILURE = "upstream_failure"

    @property
    def status_code(self) -> int:
        return _ERROR_STATUS_CODES[self]

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_STATUS_CODES = {
    LookupErrorKind.INVALID_INPUT: 422,
    LookupErrorKind.NOT_FOUND: 404,
    LookupErrorKind.UPSTREAM_FAILURE: 500,
}

_ERROR_MESSAGES = {
    LookupErrorKind.INVALID_INPUT: "invalid zipcode",
    LookupErrorKind.NOT_FOUND: "can not find zipcode",
    LookupErrorKind.UPSTREAM_FAILURE: "internal error",
}


class Coordinates(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    lat: str
    lon: str
    display_name: str | None = None

    @field_validator("lat", "lon")
    @classmethod
    def validate_coordinate(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("coordinate values must not be empty")
        return value


class WeatherReading(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    temp_c: float
    temp_f: float


class TemperatureResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    temp_c: float
    temp_f: float
    temp_k: float

    @classmethod
    def from_reading(cls, reading: WeatherReading) -> TemperatureResult:
        # Kelvin uses a whole-degree offset; computed before narrowing.
        return cls(
            temp_c=to_float32(reading.temp_c),
            temp_f=to_float32(reading.temp_f),
            temp_k=to_float32(reading.temp_c + KELVIN_OFFSET),
        )


class ErrorResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    code: int

    @classmethod
    def from_kind(cls, kind: LookupErrorKind) -> ErrorResult:
        return cls(message=kind.message, code=kind.status_code)
