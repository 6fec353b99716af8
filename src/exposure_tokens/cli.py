"""exposure-tokens

Compute exposure tokens for an exported location history.

Usage:
    exposure-tokens locations.json -o hashed.json
    cat locations.json | exposure-tokens - --rehash --workers 4

Input is a JSON array of {time, latitude, longitude[, hashes]} objects with
time in milliseconds since the epoch. Invalid entries are dropped. The output
is the same shape, with hashes filled in, ordered by time.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

import structlog

from exposure_tokens.config import Settings
from exposure_tokens.hashing import TOKEN_FORMAT_V1, TOKEN_FORMAT_V2
from exposure_tokens.interchange import dump_export, load_export, raw_location_from_record
from exposure_tokens.logging import setup_logging
from exposure_tokens.models import HashedLocationRecord
from exposure_tokens.pool import TokenHashingPool
from exposure_tokens.repository import InMemoryLocationRepository

logger = structlog.get_logger(__name__)

TOKEN_FORMATS = {p.version: p for p in (TOKEN_FORMAT_V1, TOKEN_FORMAT_V2)}


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="exposure-tokens",
        description="Hash a location history export into exposure tokens",
    )
    parser.add_argument("input", help="JSON export to read, or - for stdin")
    parser.add_argument(
        "-o", "--output", help="Where to write the hashed export (default: stdout)"
    )
    parser.add_argument(
        "--rehash",
        action="store_true",
        help="Recompute tokens even for entries that already carry hashes",
    )
    parser.add_argument(
        "--format-version",
        choices=sorted(TOKEN_FORMATS),
        default=TOKEN_FORMAT_V2.version,
        help="Token format (scrypt parameter set) to hash with",
    )
    parser.add_argument(
        "--workers", type=positive_int, help="Worker processes for hashing"
    )
    parser.add_argument("--log-level", help="Override the configured log level")
    return parser.parse_args(argv)


async def hash_records(
    records: List[HashedLocationRecord],
    pool: TokenHashingPool,
    rehash: bool = False,
) -> List[HashedLocationRecord]:
    """Fill in tokens for records that need them, keeping the rest as-is"""
    pending = [i for i, r in enumerate(records) if rehash or not r.tokens]
    token_lists = await pool.hash_locations(
        [raw_location_from_record(records[i]) for i in pending]
    )

    hashed = list(records)
    for i, tokens in zip(pending, token_lists):
        hashed[i] = records[i].with_tokens(tokens, replace=True)
    return hashed


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    settings = Settings()
    if args.log_level:
        settings = settings.model_copy(update={"log_level": args.log_level})
    setup_logging(settings=settings)

    try:
        records = load_export(_read_input(args.input))
    except (OSError, ValueError) as e:
        logger.error("Could not read location export", input=args.input, error=str(e))
        return 2

    repository = InMemoryLocationRepository()
    with TokenHashingPool(
        settings=settings,
        params=TOKEN_FORMATS[args.format_version],
        max_workers=args.workers,
    ) as pool:
        repository.add_all(asyncio.run(hash_records(records, pool, args.rehash)))

    output = dump_export(repository.list())
    if args.output:
        with open(args.output, "wb") as f:
            f.write(output)
    else:
        sys.stdout.buffer.write(output + b"\n")

    logger.info(
        "Wrote hashed export",
        records=len(repository),
        output=args.output or "stdout",
        format_version=args.format_version,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
