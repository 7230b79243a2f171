"""Pydantic models describing observers and locations."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .angles import dms_to_float

__all__ = [
    "Depression",
    "SunDirection",
    "SimpleElevation",
    "ObscuredElevation",
    "Elevation",
    "Observer",
    "LocationInfo",
]


class Depression(float, Enum):
    """Named depressions of the Sun below the horizon, in degrees."""

    CIVIL = 6.0
    NAUTICAL = 12.0
    ASTRONOMICAL = 18.0


class SunDirection(int, Enum):
    """Whether an event happens while the body is rising or setting."""

    RISING = 1
    SETTING = -1


class SimpleElevation(BaseModel):
    """Observer height above an unobstructed horizon."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["simple"] = "simple"
    meters: float = Field(0.0, description="Height above the horizon in meters")


class ObscuredElevation(BaseModel):
    """A feature on the horizon hiding the body, given by height and distance."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["obscured"] = "obscured"
    height: float = Field(..., description="Height of the feature in meters")
    distance: float = Field(..., ge=0.0, description="Horizontal distance to the feature in meters")


Elevation = Annotated[Union[SimpleElevation, ObscuredElevation], Field(discriminator="kind")]


class Observer(BaseModel):
    """A point on the Earth's surface from which the sky is observed.

    Latitude and longitude are clamped to ``[-90, 90]`` and ``[-180, 180]``
    and may also be given as strings such as ``51°31'N``. The elevation may
    be a plain number of meters or a ``(height, distance)`` pair describing
    an obscuring feature.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(51.4733, description="Latitude in degrees, north positive")
    longitude: float = Field(-0.0008333, description="Longitude in degrees, east positive")
    elevation: Elevation = Field(default_factory=SimpleElevation)

    @field_validator("latitude", mode="before")
    @classmethod
    def validate_latitude(cls, value: Any) -> float:
        return dms_to_float(value, 90.0)

    @field_validator("longitude", mode="before")
    @classmethod
    def validate_longitude(cls, value: Any) -> float:
        return dms_to_float(value, 180.0)

    @field_validator("elevation", mode="before")
    @classmethod
    def validate_elevation(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return SimpleElevation(meters=float(value))
        if isinstance(value, (tuple, list)) and len(value) == 2:
            height, distance = value
            return ObscuredElevation(height=float(height), distance=float(distance))
        return value


class LocationInfo(BaseModel):
    """A named place with its time zone."""

    model_config = ConfigDict(frozen=True)

    name: str = "Greenwich"
    region: str = "England"
    timezone: str = Field("Europe/London", description="IANA time zone name")
    latitude: float = 51.4733
    longitude: float = -0.0008333

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value}") from exc
        return value

    @field_validator("latitude", mode="before")
    @classmethod
    def validate_latitude(cls, value: Any) -> float:
        return dms_to_float(value, 90.0)

    @field_validator("longitude", mode="before")
    @classmethod
    def validate_longitude(cls, value: Any) -> float:
        return dms_to_float(value, 180.0)

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def timezone_group(self) -> str:
        return self.timezone.split("/", 1)[0]

    @property
    def observer(self) -> Observer:
        return Observer(latitude=self.latitude, longitude=self.longitude, elevation=0.0)
