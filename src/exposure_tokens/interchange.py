"""Conversions at the edges: device fixes, imports, exports"""

import math
import re
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional

import orjson
import structlog

from exposure_tokens.models import (
    HashedLocationRecord,
    LocationSource,
    RawLocation,
    from_epoch_ms,
)
from exposure_tokens.tokens import hash_location

logger = structlog.get_logger(__name__)

# Plain decimal literal; no surrounding whitespace or digit separators.
_NUMERIC_TIME = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def raw_location_from_fix(fix: Any, source: LocationSource = LocationSource.DEVICE) -> RawLocation:
    """
    Adapt a platform location object into a RawLocation.

    The object is read by attribute: ``time``, ``latitude`` and ``longitude``
    plus whichever of ``accuracy``, ``altitude``, ``altitude_accuracy``,
    ``speed`` and ``heading`` (or ``bearing``) it has.
    """
    bearing = getattr(fix, "heading", None)
    if bearing is None:
        bearing = getattr(fix, "bearing", None)

    return RawLocation(
        timestamp=getattr(fix, "time", None),
        latitude=float(fix.latitude),
        longitude=float(fix.longitude),
        accuracy=getattr(fix, "accuracy", None),
        altitude=getattr(fix, "altitude", None),
        altitude_accuracy=getattr(fix, "altitude_accuracy", None),
        speed=getattr(fix, "speed", None),
        bearing=bearing,
        source=source,
    )


def raw_location_from_record(record: HashedLocationRecord) -> RawLocation:
    """Rebuild the RawLocation a stored record was made from"""
    return RawLocation(
        timestamp=record.timestamp,
        latitude=record.latitude,
        longitude=record.longitude,
        accuracy=record.accuracy,
        altitude=record.altitude,
        altitude_accuracy=record.altitude_accuracy,
        speed=record.speed,
        bearing=record.bearing,
        source=record.source,
    )


def build_record(
    raw: RawLocation,
    source: Optional[LocationSource] = None,
    hash: bool = True,
    hasher: Optional[Callable[[str], str]] = None,
) -> Optional[HashedLocationRecord]:
    """Create the persisted record for a raw location, hashing it unless told not to.

    Returns None for unacceptable locations.
    """
    if not raw.is_acceptable:
        logger.debug("Rejected unacceptable location", source=(source or raw.source).value)
        return None

    record = HashedLocationRecord(
        timestamp=raw.timestamp,
        latitude=raw.latitude,
        longitude=raw.longitude,
        source=source or raw.source,
        altitude=raw.altitude,
        speed=raw.speed,
        accuracy=raw.accuracy,
        altitude_accuracy=raw.altitude_accuracy,
        bearing=raw.bearing,
    )
    if hash:
        record = record.with_tokens(hash_location(raw, hasher=hasher))
    return record


def assumed_location(
    timestamp: datetime,
    latitude: float,
    longitude: float,
    hash: bool = True,
    hasher: Optional[Callable[[str], str]] = None,
) -> Optional[HashedLocationRecord]:
    """Record for a position the user is assumed to have been at"""
    raw = RawLocation(
        timestamp=timestamp,
        latitude=latitude,
        longitude=longitude,
        source=LocationSource.ASSUMED,
    )
    return build_record(raw, hash=hash, hasher=hasher)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_time_ms(value: Any) -> Optional[float]:
    if isinstance(value, str):
        if not _NUMERIC_TIME.fullmatch(value):
            return None
        parsed = float(value)
    elif _is_number(value):
        parsed = float(value)
    else:
        return None
    return parsed if math.isfinite(parsed) else None


def parse_import_record(
    data: Any, source: LocationSource = LocationSource.EXTERNAL
) -> Optional[HashedLocationRecord]:
    """
    Parse one imported location dict.

    Recognized keys are ``time`` (ms since epoch, number or numeric string),
    ``latitude``, ``longitude`` (numbers) and ``hashes`` (list of hex tokens).
    Any missing or unparsable field rejects the whole record, as does a
    latitude or longitude of exactly 0.0.
    """
    if not isinstance(data, dict):
        return None

    time_ms = _parse_time_ms(data.get("time"))
    latitude = data.get("latitude")
    longitude = data.get("longitude")

    if time_ms is None or not _is_number(latitude) or not _is_number(longitude):
        logger.debug("Rejected import record with missing or invalid fields")
        return None
    if latitude == 0.0 or longitude == 0.0:
        logger.debug("Rejected import record with zero coordinate")
        return None

    try:
        timestamp = from_epoch_ms(time_ms)
    except OverflowError:
        logger.debug("Rejected import record with out-of-range time", time=time_ms)
        return None

    hashes = data.get("hashes")
    tokens: tuple = ()
    if isinstance(hashes, list) and all(isinstance(h, str) for h in hashes):
        tokens = tuple(hashes)

    return HashedLocationRecord(
        timestamp=timestamp,
        latitude=float(latitude),
        longitude=float(longitude),
        source=source,
        tokens=tokens,
    )


def load_export(
    payload: bytes, source: LocationSource = LocationSource.EXTERNAL
) -> List[HashedLocationRecord]:
    """Parse a JSON array of location dicts, skipping entries that are rejected"""
    entries = orjson.loads(payload)
    if not isinstance(entries, list):
        raise ValueError("Expected a JSON array of locations")

    records = []
    for entry in entries:
        record = parse_import_record(entry, source)
        if record is not None:
            records.append(record)

    logger.info(
        "Loaded location export",
        total=len(entries),
        accepted=len(records),
        rejected=len(entries) - len(records),
    )
    return records


def dump_export(records: Iterable[HashedLocationRecord]) -> bytes:
    """Serialize records in their sharable form as a JSON array"""
    return orjson.dumps([record.to_sharable_dict() for record in records])
