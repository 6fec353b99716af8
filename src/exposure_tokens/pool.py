"""Process pool for hashing many locations at once"""

import asyncio
import time
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from typing import List, Optional, Sequence

import structlog

from exposure_tokens.config import Settings
from exposure_tokens.hashing import CURRENT_TOKEN_FORMAT, ScryptParams, scrypt_hex
from exposure_tokens.models import RawLocation
from exposure_tokens.tokens import TokenAssembler, default_assembler

logger = structlog.get_logger(__name__)


class TokenHashingPool:
    """Runs scrypt for each token candidate in a separate worker process.

    Every candidate is an independent, side-effect free unit of work, so
    results are simply gathered back in submission order.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        params: ScryptParams = CURRENT_TOKEN_FORMAT,
        assembler: Optional[TokenAssembler] = None,
        max_workers: Optional[int] = None,
    ):
        settings = settings or Settings()
        self.params = params
        self.assembler = assembler or default_assembler
        if max_workers is None:
            max_workers = settings.hash_workers
        self.max_workers = max_workers
        self.executor = ProcessPoolExecutor(max_workers=self.max_workers)

    def __enter__(self) -> "TokenHashingPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    async def __aenter__(self) -> "TokenHashingPool":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Shut the worker processes down"""
        self.executor.shutdown(wait=True)

    async def hash_candidates(self, candidates: Sequence[str]) -> List[str]:
        loop = asyncio.get_running_loop()
        work = partial(scrypt_hex, params=self.params)
        return list(
            await asyncio.gather(
                *(loop.run_in_executor(self.executor, work, c) for c in candidates)
            )
        )

    async def hash_location(self, location: RawLocation) -> List[str]:
        """Tokens for one location; empty if the location is unacceptable"""
        return await self.hash_candidates(self.assembler.assemble(location))

    async def hash_locations(self, locations: Sequence[RawLocation]) -> List[List[str]]:
        """Tokens for each location, in input order"""
        start = time.perf_counter()
        candidate_lists = [self.assembler.assemble(loc) for loc in locations]
        flat = [c for candidates in candidate_lists for c in candidates]

        hashed = await self.hash_candidates(flat)

        results: List[List[str]] = []
        offset = 0
        for candidates in candidate_lists:
            results.append(hashed[offset : offset + len(candidates)])
            offset += len(candidates)

        logger.info(
            "Hashed location batch",
            locations=len(locations),
            skipped=sum(1 for c in candidate_lists if not c),
            tokens=len(hashed),
            workers=self.max_workers,
            duration_seconds=round(time.perf_counter() - start, 3),
        )
        return results
