"""Unit tests for scrypt token hashing."""

import dataclasses
import re
from unittest.mock import patch

import pytest

from exposure_tokens.exceptions import TokenHashingError
from exposure_tokens.hashing import (
    CURRENT_TOKEN_FORMAT,
    TOKEN_FORMAT_V1,
    TOKEN_FORMAT_V2,
    PasswordBasedHasher,
    ScryptParams,
    scrypt_hex,
)

HEX16 = re.compile(r"^[0-9a-f]{16}$")
CANDIDATE = "9q8yyk8y1590000000000"


class TestTokenFormats:
    """Test the published parameter sets."""

    def test_current_format(self):
        """Test the current format matches the fixed parameters."""
        assert CURRENT_TOKEN_FORMAT is TOKEN_FORMAT_V2
        assert (TOKEN_FORMAT_V2.n, TOKEN_FORMAT_V2.r, TOKEN_FORMAT_V2.p) == (4096, 8, 1)
        assert TOKEN_FORMAT_V2.salt == b"salt"
        assert TOKEN_FORMAT_V2.dklen == 8

    def test_legacy_format_differs_only_in_cost(self):
        """Test v1 is the pre-change cost factor."""
        assert TOKEN_FORMAT_V1.n == 16384
        assert dataclasses.replace(TOKEN_FORMAT_V1, version="v2", n=4096) == TOKEN_FORMAT_V2

    def test_params_are_immutable(self):
        """Test a parameter set cannot be modified in place."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            TOKEN_FORMAT_V2.n = 1024


class TestScryptHex:
    """Test the hashing primitive."""

    def test_rfc7914_vectors(self):
        """Test against the RFC 7914 scrypt test vectors (first 8 bytes)."""
        empty = ScryptParams(version="rfc-1", n=16, r=1, p=1, salt=b"", dklen=8)
        nacl = ScryptParams(version="rfc-2", n=1024, r=8, p=16, salt=b"NaCl", dklen=8)

        assert scrypt_hex("", empty) == "77d6576238657b20"
        assert scrypt_hex("password", nacl) == "fdbabe1c9d347200"

    def test_output_shape(self):
        """Test tokens are 16 lowercase hex characters."""
        assert HEX16.match(scrypt_hex(CANDIDATE))

    def test_deterministic(self):
        """Test hashing the same candidate twice gives the same token."""
        assert scrypt_hex(CANDIDATE) == scrypt_hex(CANDIDATE)

    def test_different_candidates_differ(self):
        """Test distinct candidates give distinct tokens."""
        assert scrypt_hex(CANDIDATE) != scrypt_hex("9q8yyk8y1590000300000")

    def test_utf8_input(self):
        """Test non-ASCII input is hashed as UTF-8."""
        assert HEX16.match(scrypt_hex("ümlaut"))

    @pytest.mark.parametrize(
        "change",
        [
            {"n": 2048},
            {"r": 4},
            {"p": 2},
            {"salt": b"pepper"},
            {"dklen": 16},
        ],
    )
    def test_parameter_sensitivity(self, change):
        """Test changing any single parameter changes the token."""
        params = dataclasses.replace(TOKEN_FORMAT_V2, version="test", **change)

        assert scrypt_hex(CANDIDATE, params) != scrypt_hex(CANDIDATE, TOKEN_FORMAT_V2)

    def test_primitive_failure_is_fatal(self):
        """Test a failing KDF raises TokenHashingError with the cause chained."""
        with patch(
            "exposure_tokens.hashing.hashlib.scrypt",
            side_effect=ValueError("memory limit exceeded"),
        ):
            with pytest.raises(TokenHashingError) as exc_info:
                scrypt_hex(CANDIDATE)

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_invalid_cost_factor(self):
        """Test parameters scrypt refuses surface as TokenHashingError."""
        bad = dataclasses.replace(TOKEN_FORMAT_V2, version="bad", n=1000)
        with pytest.raises(TokenHashingError):
            scrypt_hex(CANDIDATE, bad)


class TestPasswordBasedHasher:
    """Test the hasher wrapper."""

    def test_defaults_to_current_format(self):
        """Test a default hasher uses v2."""
        hasher = PasswordBasedHasher()
        assert hasher.version == "v2"
        assert hasher.hash(CANDIDATE) == scrypt_hex(CANDIDATE, TOKEN_FORMAT_V2)

    def test_callable(self):
        """Test the hasher can be used as a plain function."""
        hasher = PasswordBasedHasher(TOKEN_FORMAT_V1)
        assert hasher(CANDIDATE) == hasher.hash(CANDIDATE)
        assert hasher(CANDIDATE) != PasswordBasedHasher()(CANDIDATE)
