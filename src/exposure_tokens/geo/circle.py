"""Sampling a small circle of points around a location"""

from typing import List, Sequence, Tuple

Point = Tuple[float, float]

DEFAULT_RADIUS_METERS = 10.0

# (dlat, dlon) in degrees for the center plus eight compass points roughly
# DEFAULT_RADIUS_METERS away. Changing this table changes every token.
GEO_CIRCLE_OFFSETS: Tuple[Point, ...] = (
    (0.0, 0.0),  # center
    (0.0001, 0.0),  # N
    (0.00007, 0.00007),  # NE
    (0.0, 0.0001),  # E
    (-0.00007, 0.00007),  # SE
    (-0.0001, 0.0),  # S
    (-0.00007, -0.00007),  # SW
    (0.0, -0.0001),  # W
    (0.00007, -0.00007),  # NW
)


def normalize_point(latitude: float, longitude: float) -> Point:
    """Fold a point back into the legal coordinate range.

    Longitude wraps across the antimeridian and latitude is clamped at the
    poles. Points already in range are returned unchanged.
    """
    if not -180.0 <= longitude <= 180.0:
        longitude = ((longitude + 180.0) % 360.0) - 180.0
    return min(90.0, max(-90.0, latitude)), longitude


class GeoCircleSampler:
    """Applies a fixed offset table to a center point.

    The default radius uses GEO_CIRCLE_OFFSETS as-is; any other radius scales
    the same table linearly.
    """

    def __init__(self, radius_meters: float = DEFAULT_RADIUS_METERS):
        if radius_meters <= 0:
            raise ValueError("radius_meters must be positive")
        self.radius_meters = radius_meters
        if radius_meters == DEFAULT_RADIUS_METERS:
            self.offsets: Sequence[Point] = GEO_CIRCLE_OFFSETS
        else:
            scale = radius_meters / DEFAULT_RADIUS_METERS
            self.offsets = tuple(
                (dlat * scale, dlon * scale) for dlat, dlon in GEO_CIRCLE_OFFSETS
            )

    def sample(self, latitude: float, longitude: float) -> List[Point]:
        return [
            normalize_point(latitude + dlat, longitude + dlon)
            for dlat, dlon in self.offsets
        ]


_default_sampler = GeoCircleSampler()


def sample_circle(latitude: float, longitude: float) -> List[Point]:
    """Sample points around (latitude, longitude) at the default radius"""
    return _default_sampler.sample(latitude, longitude)
