"""
Slow, memory-hard hashing of token candidates

Tokens are scrypt-derived keys rendered as hex. scrypt makes brute-forcing a
token back to a geohash and time window expensive; the parameter set is part
of the token format, and any change to it makes previously published tokens
unmatchable.
"""

import hashlib
from dataclasses import dataclass

from exposure_tokens.exceptions import TokenHashingError


@dataclass(frozen=True)
class ScryptParams:
    """One version of the token format"""

    version: str
    n: int
    r: int
    p: int
    salt: bytes
    dklen: int

    @property
    def memory_bytes(self) -> int:
        return 128 * self.r * self.n * self.p


# Cost factor in use before it was lowered to 4096
TOKEN_FORMAT_V1 = ScryptParams(version="v1", n=16384, r=8, p=1, salt=b"salt", dklen=8)
TOKEN_FORMAT_V2 = ScryptParams(version="v2", n=4096, r=8, p=1, salt=b"salt", dklen=8)

CURRENT_TOKEN_FORMAT = TOKEN_FORMAT_V2


def scrypt_hex(candidate: str, params: ScryptParams = CURRENT_TOKEN_FORMAT) -> str:
    """Hash one token candidate, returning 2 * dklen lowercase hex characters"""
    try:
        key = hashlib.scrypt(
            candidate.encode("utf-8"),
            salt=params.salt,
            n=params.n,
            r=params.r,
            p=params.p,
            # Leave headroom over the working set OpenSSL actually needs
            maxmem=2 * params.memory_bytes + 1024 * 1024,
            dklen=params.dklen,
        )
    except (ValueError, MemoryError) as e:
        raise TokenHashingError(
            f"scrypt {params.version} failed for token candidate: {e}"
        ) from e
    return key.hex()


class PasswordBasedHasher:
    """Hashes token candidates with a fixed ScryptParams set."""

    def __init__(self, params: ScryptParams = CURRENT_TOKEN_FORMAT):
        self.params = params

    @property
    def version(self) -> str:
        return self.params.version

    def hash(self, candidate: str) -> str:
        return scrypt_hex(candidate, self.params)

    def __call__(self, candidate: str) -> str:
        return self.hash(candidate)
