"""
Geographic primitives: neighborhood sampling, geohashing, proximity
"""

from exposure_tokens.geo.circle import (
    GEO_CIRCLE_OFFSETS,
    GeoCircleSampler,
    normalize_point,
    sample_circle,
)
from exposure_tokens.geo.geohash import GEOHASH_PRECISION, encode_geohash
from exposure_tokens.geo.proximity import NEARBY_DISTANCE_METERS, distance_meters, is_nearby

__all__ = [
    "GEO_CIRCLE_OFFSETS",
    "GeoCircleSampler",
    "normalize_point",
    "sample_circle",
    "GEOHASH_PRECISION",
    "encode_geohash",
    "NEARBY_DISTANCE_METERS",
    "distance_meters",
    "is_nearby",
]
