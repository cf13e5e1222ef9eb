"""
Durable storage for quiz sessions.

Two backends behind one interface:
- InMemorySessionStore: process-local dict, the default
- RedisSessionStore: JSON snapshots in Redis with optional TTL

Only the SessionSnapshot slice is stored; it round-trips the question,
answer and result models losslessly.
"""

import logging
from typing import Dict, Optional

from pydantic import ValidationError
from redis import ConnectionPool, Redis, RedisError

from parse_practice.core.exceptions import SessionStoreError
from parse_practice.schemas.quiz import SessionSnapshot

logger = logging.getLogger(__name__)


class SessionStore:
    """Interface for session snapshot storage."""

    def get(self, session_id: str) -> Optional[SessionSnapshot]:
        raise NotImplementedError

    def set(self, session_id: str, snapshot: SessionSnapshot) -> None:
        raise NotImplementedError

    def delete(self, session_id: str) -> None:
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    """
    Keeps serialized snapshots in a dict.

    Snapshots are stored as JSON so that reads hand out independent copies,
    the same as the Redis backend.
    """

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, session_id: str) -> Optional[SessionSnapshot]:
        payload = self._data.get(session_id)
        if payload is None:
            return None
        return SessionSnapshot.model_validate_json(payload)

    def set(self, session_id: str, snapshot: SessionSnapshot) -> None:
        self._data[session_id] = snapshot.model_dump_json()

    def delete(self, session_id: str) -> None:
        self._data.pop(session_id, None)


class RedisSessionStore(SessionStore):
    """
    Redis-backed snapshot storage.

    Features:
    - Connection pooling
    - JSON serialization via the pydantic models
    - Optional TTL per session
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        key_prefix: str = "practice-test-storage",
        ttl: Optional[int] = None,
        socket_timeout: int = 5,
        password: Optional[str] = None,
        client: Optional[Redis] = None,
    ):
        self.key_prefix = key_prefix
        self.ttl = ttl

        if client is not None:
            self.client = client
            return

        try:
            pool = ConnectionPool.from_url(
                redis_url,
                socket_timeout=socket_timeout,
                socket_connect_timeout=socket_timeout,
                password=password,
                decode_responses=True,
            )
            self.client = Redis(connection_pool=pool)
            self.client.ping()
            logger.info(f"✅ Redis session store connected: {redis_url}")
        except RedisError as e:
            logger.error(f"❌ Failed to connect to Redis: {e}")
            raise SessionStoreError(f"Redis connection failed: {e}") from e

    def _key(self, session_id: str) -> str:
        return f"{self.key_prefix}:{session_id}"

    def get(self, session_id: str) -> Optional[SessionSnapshot]:
        try:
            payload = self.client.get(self._key(session_id))
        except RedisError as e:
            logger.error(f"Redis get error for session {session_id}: {e}")
            raise SessionStoreError(f"Could not read session: {e}", session_id=session_id) from e

        if payload is None:
            return None
        try:
            return SessionSnapshot.model_validate_json(payload)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable snapshot for session {session_id}: {e}")
            return None

    def set(self, session_id: str, snapshot: SessionSnapshot) -> None:
        try:
            payload = snapshot.model_dump_json()
            if self.ttl:
                self.client.setex(self._key(session_id), self.ttl, payload)
            else:
                self.client.set(self._key(session_id), payload)
        except RedisError as e:
            logger.error(f"Redis set error for session {session_id}: {e}")
            raise SessionStoreError(f"Could not write session: {e}", session_id=session_id) from e

    def delete(self, session_id: str) -> None:
        try:
            self.client.delete(self._key(session_id))
        except RedisError as e:
            logger.error(f"Redis delete error for session {session_id}: {e}")
            raise SessionStoreError(f"Could not delete session: {e}", session_id=session_id) from e


def create_session_store() -> SessionStore:
    """Build the store selected by ``SESSION_BACKEND``."""
    from parse_practice.core.config import get_settings

    settings = get_settings()
    if settings.SESSION_BACKEND == "redis":
        return RedisSessionStore(
            redis_url=settings.REDIS_URL,
            key_prefix=settings.REDIS_KEY_PREFIX,
            ttl=settings.SESSION_TTL,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            password=settings.REDIS_PASSWORD,
        )
    return InMemorySessionStore()
