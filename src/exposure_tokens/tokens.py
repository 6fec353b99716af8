"""Turning a raw location into its hashed tokens"""

import time
from typing import Callable, List, Optional

import structlog

from exposure_tokens.geo.circle import GeoCircleSampler
from exposure_tokens.geo.geohash import GEOHASH_PRECISION, encode_geohash
from exposure_tokens.hashing import PasswordBasedHasher
from exposure_tokens.models import RawLocation
from exposure_tokens.time_windows import TIME_WINDOW_INTERVAL_MS, time_windows

logger = structlog.get_logger(__name__)


class TokenAssembler:
    """Builds the un-hashed "<geohash><window>" token candidates for a location."""

    def __init__(
        self,
        sampler: Optional[GeoCircleSampler] = None,
        precision: int = GEOHASH_PRECISION,
        interval_ms: int = TIME_WINDOW_INTERVAL_MS,
    ):
        self.sampler = sampler or GeoCircleSampler()
        self.precision = precision
        self.interval_ms = interval_ms

    def geohashes(self, location: RawLocation) -> List[str]:
        """Distinct geohashes of the sampled circle, sorted."""
        return sorted(
            {
                encode_geohash(lat, lon, self.precision)
                for lat, lon in self.sampler.sample(location.latitude, location.longitude)
            }
        )

    def assemble(self, location: RawLocation) -> List[str]:
        """
        Token candidates for a location, or an empty list if it is unacceptable.

        Each geohash is paired with the early and late time window. Geohashes
        are visited in sorted order so the result is reproducible.
        """
        if not location.is_acceptable:
            logger.debug(
                "Skipping unacceptable location",
                has_timestamp=location.timestamp is not None,
            )
            return []

        early, late = time_windows(location.timestamp_ms, self.interval_ms)
        candidates: List[str] = []
        for geohash in self.geohashes(location):
            candidates.append(f"{geohash}{early}")
            candidates.append(f"{geohash}{late}")
        return list(dict.fromkeys(candidates))


default_assembler = TokenAssembler()


def hash_location(
    location: RawLocation,
    hasher: Optional[Callable[[str], str]] = None,
    assembler: Optional[TokenAssembler] = None,
) -> List[str]:
    """Assemble and hash all tokens for one location, in candidate order"""
    hasher = hasher or PasswordBasedHasher()
    assembler = assembler or default_assembler

    candidates = assembler.assemble(location)
    if not candidates:
        return []

    start = time.perf_counter()
    tokens = [hasher(candidate) for candidate in candidates]
    logger.debug(
        "Hashing completed",
        token_count=len(tokens),
        duration_seconds=round(time.perf_counter() - start, 4),
    )
    return tokens
