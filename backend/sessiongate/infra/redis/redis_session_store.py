# sessiongate/infra/redis/redis_session_store.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

import redis  # type: ignore[import-untyped]

from sessiongate.services._shared.ports import SessionStore, SessionView


def _b(value: bytes | str | None, default: str = "") -> str:
    if value is None:
        return default
    return value.decode() if isinstance(value, bytes) else value


@dataclass(slots=True)
class RedisSessionStore(SessionStore):
    """
    Redis-backed session store.

    Layout
    ------
    - ``session:seq``: ``INCR`` counter handing out integer session ids.
    - ``session:{id}``: hash with ``user_id``, ``user_client``, ``is_valid``,
      ``created_at`` and ``updated_at`` (epoch seconds as strings).
    - ``session:u:{user_id}``: set of session ids owned by the user.

    Keys carry no TTL; sessions are never deleted here.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    SEQ_KEY = "session:seq"

    # -------------------- helpers --------------------

    @staticmethod
    def _k(session_id: int) -> str:
        return f"session:{session_id}"

    @staticmethod
    def _ku(user_id: int) -> str:
        return f"session:u:{user_id}"

    @staticmethod
    def _now_ts() -> str:
        return f"{datetime.now(UTC).timestamp():.6f}"

    @staticmethod
    def _from_ts(raw: str) -> datetime:
        return datetime.fromtimestamp(float(raw or 0), UTC)

    def _to_view(self, session_id: int, h: dict) -> SessionView:
        def get(name: str):
            # redis-py returns bytes keys unless decode_responses is set
            return h.get(name.encode(), h.get(name))

        client = _b(get("user_client"))
        return SessionView(
            id=session_id,
            user_id=int(_b(get("user_id"), "0")),
            user_client=client or None,
            is_valid=_b(get("is_valid"), "0") == "1",
            created_at=self._from_ts(_b(get("created_at"))),
            updated_at=self._from_ts(_b(get("updated_at"))),
        )

    # -------------------- API ------------------------

    def create(self, *, user_id: int, user_client: str | None = None) -> SessionView:
        """
        Allocate an id and write the session hash plus its index entry in one
        MULTI/EXEC block.
        """
        session_id = int(self.r.incr(self.SEQ_KEY))
        now = self._now_ts()
        mapping = {
            "user_id": str(user_id),
            "user_client": user_client or "",
            "is_valid": "1",
            "created_at": now,
            "updated_at": now,
        }
        pipe = self.r.pipeline(transaction=True)
        pipe.hset(self._k(session_id), mapping=mapping)
        pipe.sadd(self._ku(user_id), session_id)
        pipe.execute()
        return self._to_view(session_id, mapping)

    def get(self, session_id: int) -> SessionView | None:
        h = self.r.hgetall(self._k(session_id))
        if not h:
            return None
        return self._to_view(session_id, h)

    def invalidate(self, session_id: int) -> bool:
        """
        Flip ``is_valid`` to ``0`` using WATCH/MULTI/EXEC so a concurrent
        write to the same hash cannot resurrect the session.
        """
        key = self._k(session_id)
        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(key)
                    state = p.hget(key, "is_valid")
                    if state is None:
                        p.unwatch()
                        return False
                    if _b(state) == "0":
                        p.unwatch()
                        return True
                    p.multi()
                    p.hset(key, mapping={"is_valid": "0", "updated_at": self._now_ts()})
                    p.execute()
                    return True
            except redis.WatchError:
                # Another client touched the key; retry.
                continue

    def list_for_user(self, user_id: int) -> list[SessionView]:
        ids = sorted(int(_b(raw)) for raw in self.r.smembers(self._ku(user_id)))
        views = []
        for session_id in ids:
            view = self.get(session_id)
            if view is not None:
                views.append(view)
        return views
