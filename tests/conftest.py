"""Common test fixtures for exposure token tests."""

import os
from datetime import datetime, timezone

import pytest

from exposure_tokens.models import LocationSource, RawLocation

# San Francisco, 2020-05-20T18:40:00Z (an exact 5 minute boundary)
SF_LATITUDE = 37.7749
SF_LONGITUDE = -122.4194
SF_TIME_MS = 1590000000000


@pytest.fixture
def sf_time():
    """Timestamp of the sample fix."""
    return datetime.fromtimestamp(SF_TIME_MS / 1000, tz=timezone.utc)


@pytest.fixture
def sf_location(sf_time):
    """Acceptable device location in San Francisco."""
    return RawLocation(
        timestamp=sf_time,
        latitude=SF_LATITUDE,
        longitude=SF_LONGITUDE,
        accuracy=5.0,
        altitude=16.0,
        speed=1.2,
        bearing=90.0,
        source=LocationSource.DEVICE,
    )


@pytest.fixture
def sample_export():
    """Exported location history as it would arrive from another app."""
    return [
        {
            "time": SF_TIME_MS + 600000,
            "latitude": 37.7750,
            "longitude": -122.4195,
        },
        {
            "time": str(SF_TIME_MS),
            "latitude": SF_LATITUDE,
            "longitude": SF_LONGITUDE,
            "hashes": ["00112233aabbccdd"],
        },
        {"time": "yesterday", "latitude": 40.0, "longitude": -75.0},
        {"time": SF_TIME_MS, "latitude": 0.0, "longitude": -75.0},
        {"latitude": 40.0, "longitude": -75.0},
    ]


@pytest.fixture(autouse=True)
def setup_environment():
    """Keep EXPOSURE_* variables from the host out of the tests."""
    original_env = {k: v for k, v in os.environ.items() if k.startswith("EXPOSURE_")}
    for key in original_env:
        del os.environ[key]

    yield

    for key in [k for k in os.environ if k.startswith("EXPOSURE_")]:
        del os.environ[key]
    os.environ.update(original_env)
