"""Data models for raw and hashed locations"""

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Anything within this many degrees of (0, 0) on both axes is treated as
# a missing fix rather than a real position.
DEGENERATE_COORDINATE_EPSILON = 1e-5


def to_epoch_ms(ts: datetime) -> int:
    """Milliseconds since the Unix epoch, floored"""
    return (ts - EPOCH) // timedelta(milliseconds=1)


def from_epoch_ms(ms: float) -> datetime:
    """Inverse of to_epoch_ms"""
    return EPOCH + timedelta(milliseconds=ms)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class LocationSource(str, Enum):
    """Where a location came from."""

    DEVICE = "device"
    MIGRATION = "migration"
    EXTERNAL = "external"
    ASSUMED = "assumed"


class RawLocation(BaseModel):
    """One observed or assumed position, before hashing."""

    model_config = ConfigDict(frozen=True)

    timestamp: Optional[datetime] = Field(
        default=None, description="When the fix was taken (naive values are UTC)"
    )
    latitude: float = Field(description="Latitude in decimal degrees")
    longitude: float = Field(description="Longitude in decimal degrees")
    accuracy: Optional[float] = Field(default=None, description="Accuracy in meters")
    altitude: Optional[float] = Field(default=None, description="Altitude in meters")
    altitude_accuracy: Optional[float] = Field(
        default=None, description="Altitude accuracy in meters"
    )
    speed: Optional[float] = Field(default=None, description="Speed in m/s")
    bearing: Optional[float] = Field(default=None, description="Bearing in degrees")
    source: LocationSource = Field(default=LocationSource.DEVICE)

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    @property
    def is_acceptable(self) -> bool:
        """Has a timestamp and is not the (0, 0) placeholder fix."""
        return self.timestamp is not None and (
            abs(self.latitude) > DEGENERATE_COORDINATE_EPSILON
            or abs(self.longitude) > DEGENERATE_COORDINATE_EPSILON
        )

    @property
    def timestamp_ms(self) -> int:
        if self.timestamp is None:
            raise ValueError("Location has no timestamp")
        return to_epoch_ms(self.timestamp)


class HashedLocationRecord(BaseModel):
    """Persisted form of a location, carrying its opaque tokens."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()), description="Record ID")
    timestamp: datetime = Field(description="Millisecond-precision observation time")
    latitude: float
    longitude: float
    source: LocationSource
    provider: Optional[str] = None
    altitude: Optional[float] = None
    speed: Optional[float] = None
    accuracy: Optional[float] = None
    altitude_accuracy: Optional[float] = None
    bearing: Optional[float] = None
    tokens: Tuple[str, ...] = Field(
        default=(), description="Hex tokens, in generation order"
    )

    @field_validator("timestamp")
    @classmethod
    def truncate_to_millis(cls, v: datetime) -> datetime:
        v = _as_utc(v)
        return from_epoch_ms(to_epoch_ms(v))

    @property
    def time_ms(self) -> int:
        return to_epoch_ms(self.timestamp)

    @property
    def date(self) -> date:
        """UTC calendar day of the observation"""
        return self.timestamp.date()

    def with_tokens(
        self, tokens: Iterable[str], replace: bool = False
    ) -> "HashedLocationRecord":
        """Return a copy with the given tokens appended (or replacing the old ones)."""
        existing = () if replace else self.tokens
        return self.model_copy(update={"tokens": existing + tuple(tokens)})

    def to_sharable_dict(self) -> Dict[str, Any]:
        """Shape used when publishing or exporting a location."""
        return {
            "time": self.time_ms,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "hashes": list(self.tokens),
        }
