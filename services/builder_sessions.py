"""
services.builder_sessions - One PartNumberBuilder per configurator session.

Sessions are in-memory only.  Discarding a session resets its builder
first so any lookup still in flight is treated as stale.  Sessions left
idle longer than `ttl` seconds are discarded the next time the registry
is used.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Callable, Optional

from glenair.builder import PartNumberBuilder
from glenair.reference import ReferenceData

logger = logging.getLogger(__name__)


class BuilderSessions:

    def __init__(self, reference_factory: Callable[[], ReferenceData], *,
                 query_timeout: Optional[float] = None,
                 ttl: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        self._reference_factory = reference_factory
        self._query_timeout = query_timeout
        self._ttl = ttl
        self._clock = clock
        self._sessions: dict[str, PartNumberBuilder] = {}
        self._last_used: dict[str, float] = {}
        self._lock = threading.Lock()

    def create(self) -> tuple[str, PartNumberBuilder]:
        session_id = uuid.uuid4().hex
        builder = PartNumberBuilder(
            self._reference_factory(), query_timeout=self._query_timeout,
        )
        with self._lock:
            expired = self._pop_expired()
            self._sessions[session_id] = builder
            self._last_used[session_id] = self._clock()
        self._reset_expired(expired)
        logger.debug(f"Builder session {session_id} created")
        return session_id, builder

    def get(self, session_id: str) -> Optional[PartNumberBuilder]:
        with self._lock:
            expired = self._pop_expired()
            builder = self._sessions.get(session_id)
            if builder is not None:
                self._last_used[session_id] = self._clock()
        self._reset_expired(expired)
        return builder

    def discard(self, session_id: str) -> bool:
        with self._lock:
            builder = self._sessions.pop(session_id, None)
            self._last_used.pop(session_id, None)
        if builder is None:
            return False
        builder.reset()
        logger.debug(f"Builder session {session_id} discarded")
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _pop_expired(self) -> dict[str, PartNumberBuilder]:
        # Caller holds self._lock
        if self._ttl is None:
            return {}
        cutoff = self._clock() - self._ttl
        stale = [sid for sid, used in self._last_used.items() if used < cutoff]
        for sid in stale:
            del self._last_used[sid]
        return {sid: self._sessions.pop(sid) for sid in stale}

    @staticmethod
    def _reset_expired(expired: dict[str, PartNumberBuilder]) -> None:
        for session_id, builder in expired.items():
            builder.reset()
            logger.info(f"Builder session {session_id} expired after inactivity")
