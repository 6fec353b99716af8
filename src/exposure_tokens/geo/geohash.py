"""Geohash encoding"""

import pygeohash

# 8 characters gives cells of roughly 38m x 19m, on the order of the
# sampling radius.
GEOHASH_PRECISION = 8


def encode_geohash(
    latitude: float, longitude: float, precision: int = GEOHASH_PRECISION
) -> str:
    """Encode a coordinate as a base-32 geohash of `precision` characters"""
    return pygeohash.encode(latitude, longitude, precision=precision)
