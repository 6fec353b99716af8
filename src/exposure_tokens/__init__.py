"""
Exposure Tokens - privacy-preserving location tokens for exposure matching
"""

__version__ = "0.1.0"

from exposure_tokens.config import Settings, settings
from exposure_tokens.geo import encode_geohash, is_nearby, sample_circle
from exposure_tokens.hashing import (
    TOKEN_FORMAT_V1,
    TOKEN_FORMAT_V2,
    PasswordBasedHasher,
    ScryptParams,
)
from exposure_tokens.logging import get_logger, setup_logging
from exposure_tokens.models import HashedLocationRecord, LocationSource, RawLocation
from exposure_tokens.time_windows import time_windows
from exposure_tokens.tokens import TokenAssembler, hash_location

__all__ = [
    "Settings",
    "settings",
    "setup_logging",
    "get_logger",
    "RawLocation",
    "HashedLocationRecord",
    "LocationSource",
    "ScryptParams",
    "PasswordBasedHasher",
    "TOKEN_FORMAT_V1",
    "TOKEN_FORMAT_V2",
    "TokenAssembler",
    "hash_location",
    "encode_geohash",
    "sample_circle",
    "is_nearby",
    "time_windows",
]
