"""Nearby-distance test between two coordinates

The threshold tables come from https://en.wikipedia.org/wiki/Decimal_degrees
and the exact distance uses the spherical law of cosines
(https://www.movable-type.co.uk/scripts/latlong.html).
"""

import math

NEARBY_DISTANCE_METERS = 20.0
EARTH_RADIUS_METERS = 6371e3

# Degrees spanned by NEARBY_DISTANCE_METERS
NOT_NEARBY_IN_LATITUDE = 0.00017966  # 20 / 111320

# (band upper bound in abs latitude, degrees of longitude spanned). Above
# the last band no longitude shortcut is taken.
NOT_NEARBY_IN_LONGITUDE = (
    (23.0, 0.00019518),  # 20 / 102470
    (45.0, 0.0002541),  # 20 / 78710
    (67.0, 0.00045981),  # 20 / 43496
)


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters on a spherical earth"""
    p1 = math.radians(lat1)
    p2 = math.radians(lat2)
    delta_lambda = math.radians(lon2 - lon1)

    cos_d = math.sin(p1) * math.sin(p2) + math.cos(p1) * math.cos(p2) * math.cos(
        delta_lambda
    )
    # Rounding can push the identity just outside [-1, 1]
    cos_d = max(-1.0, min(cos_d, 1.0))
    return math.acos(cos_d) * EARTH_RADIUS_METERS


def is_nearby(lat1: float, lon1: float, lat2: float, lon2: float) -> bool:
    """True if the two points are less than NEARBY_DISTANCE_METERS apart"""
    if abs(lat2 - lat1) > NOT_NEARBY_IN_LATITUDE:
        return False

    # Band on the higher of the two latitudes so the check is symmetric
    band_lat = max(abs(lat1), abs(lat2))
    delta_lon = abs(lon2 - lon1)
    for upper_bound, threshold in NOT_NEARBY_IN_LONGITUDE:
        if band_lat < upper_bound:
            if delta_lon > threshold:
                return False
            break

    return distance_meters(lat1, lon1, lat2, lon2) < NEARBY_DISTANCE_METERS
