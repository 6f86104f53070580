import asyncio
from contextlib import asynccontextmanager
from app.config import settings


class ContestLocks:
    """Process-wide locks keyed by contest id.

    Only active when ``SERIALIZE_WRITES`` is enabled; otherwise writes to the
    same contest interleave freely and concurrent increments may be lost.
    Separate processes are never serialized against each other.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    @asynccontextmanager
    async def hold(self, contest_id: str):
        if not settings.SERIALIZE_WRITES:
            yield
            return
        lock = self._locks.setdefault(contest_id, asyncio.Lock())
        async with lock:
            yield


contest_locks = ContestLocks()
