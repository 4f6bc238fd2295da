"""Short-lived cache of resolved user roles with in-flight request deduplication."""
import asyncio
import functools
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleInfo:
    role: str
    is_admin: bool


@dataclass(frozen=True)
class RoleCacheEntry:
    role: str
    is_admin: bool
    timestamp: float


class RoleCache:
    """Role entries keyed by user id, trusted for `ttl_seconds`.

    Only touched from the event loop, so no locking. `resolve` guarantees at
    most one outstanding loader call per user.
    """

    def __init__(self, ttl_seconds: float = 30.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, RoleCacheEntry] = {}
        self._inflight: Dict[str, asyncio.Task] = {}

    def get(self, user_id: str) -> Optional[RoleInfo]:
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self.ttl_seconds:
            del self._entries[user_id]
            return None
        return RoleInfo(role=entry.role, is_admin=entry.is_admin)

    def set(self, user_id: str, info: RoleInfo, timestamp: Optional[float] = None) -> None:
        self._entries[user_id] = RoleCacheEntry(
            role=info.role,
            is_admin=info.is_admin,
            timestamp=self._clock() if timestamp is None else timestamp,
        )

    def invalidate(self, user_id: str) -> None:
        """Drop the entry and detach any in-flight request so its result is not stored."""
        self._entries.pop(user_id, None)
        self._inflight.pop(user_id, None)

    def clear(self) -> None:
        self._entries.clear()
        self._inflight.clear()

    def is_pending(self, user_id: str) -> bool:
        return user_id in self._inflight

    def _settle(self, user_id: str, started_at: float, task: asyncio.Task) -> None:
        # Runs once the loader finishes, whether or not anyone is still awaiting it
        if self._inflight.get(user_id) is not task:
            return
        del self._inflight[user_id]
        if task.cancelled() or task.exception() is not None:
            return
        self.set(user_id, task.result(), timestamp=started_at)

    async def resolve(
        self,
        user_id: str,
        loader: Callable[[], Awaitable[RoleInfo]],
        force: bool = False,
    ) -> RoleInfo:
        if not force:
            cached = self.get(user_id)
            if cached is not None:
                return cached

        task = self._inflight.get(user_id)
        if task is None:
            # Entries are stamped with the request start, not its completion
            started_at = self._clock()
            task = asyncio.ensure_future(loader())
            self._inflight[user_id] = task
            task.add_done_callback(functools.partial(self._settle, user_id, started_at))
        else:
            logger.debug(f"Joining in-flight role request for user {user_id}")

        # A cancelled caller must not cancel the request other callers share
        return await asyncio.shield(task)
