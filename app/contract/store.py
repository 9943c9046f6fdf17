# app/contract/store.py
from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from threading import Lock
from typing import Iterator, Optional, Protocol

from psycopg2.extras import Json

from app.contract.errors import NotFound
from app.contract.model import State
from settings import settings

logger = logging.getLogger("ecopayout.store")

DEFAULT_NAMESPACE = "config"


class StateStore(Protocol):
    def exists(self) -> bool: ...
    def load(self) -> State: ...
    def save(self, state: State) -> None: ...
    def create(self, state: State) -> bool: ...
    def commit(self) -> None: ...


def _encode(state: State) -> str:
    return json.dumps(state.to_dict(), sort_keys=True, separators=(",", ":"))


class MemoryStateStore:
    """
    Process-local store. Records are kept JSON-encoded so a loaded State never
    aliases a saved one.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE, records: Optional[dict[str, str]] = None):
        self.namespace = namespace
        self._records: dict[str, str] = records if records is not None else {}

    def exists(self) -> bool:
        return self.namespace in self._records

    def load(self) -> State:
        raw = self._records.get(self.namespace)
        if raw is None:
            raise NotFound("State")
        return State.from_dict(json.loads(raw))

    def save(self, state: State) -> None:
        self._records[self.namespace] = _encode(state)

    def create(self, state: State) -> bool:
        if self.namespace in self._records:
            return False
        self._records[self.namespace] = _encode(state)
        return True

    def commit(self) -> None:
        pass


class PostgresStateStore:
    """
    One row per namespace in app.contract_state. Must be used inside
    db.get_conn() so load/save share the invocation transaction.
    """

    def __init__(self, conn, namespace: str = DEFAULT_NAMESPACE):
        self.conn = conn
        self.namespace = namespace

    def exists(self) -> bool:
        with self.conn.cursor() as cur:
            cur.execute(
                "SELECT 1 FROM app.contract_state WHERE namespace = %s;",
                (self.namespace,),
            )
            return cur.fetchone() is not None

    def load(self) -> State:
        with self.conn.cursor() as cur:
            # row lock serializes invocations against the same record
            cur.execute(
                """
                SELECT value
                FROM app.contract_state
                WHERE namespace = %s
                FOR UPDATE
                """,
                (self.namespace,),
            )
            row = cur.fetchone()

        if not row:
            raise NotFound("State")

        value = row[0]
        if isinstance(value, str):
            value = json.loads(value)
        return State.from_dict(value)

    def save(self, state: State) -> None:
        with self.conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO app.contract_state (namespace, value, updated_at)
                VALUES (%s, %s::jsonb, now())
                ON CONFLICT (namespace) DO UPDATE
                  SET value = EXCLUDED.value,
                      updated_at = EXCLUDED.updated_at;
                """,
                (self.namespace, Json(state.to_dict())),
            )

    def create(self, state: State) -> bool:
        """
        Insert-only write. False when another invocation already created the
        record, even one that committed after our exists() check.
        """
        with self.conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO app.contract_state (namespace, value)
                VALUES (%s, %s::jsonb)
                ON CONFLICT (namespace) DO NOTHING;
                """,
                (self.namespace, Json(state.to_dict())),
            )
            return cur.rowcount == 1

    def commit(self) -> None:
        # the write is only durable once committed; get_conn's own commit is then a no-op
        self.conn.commit()


_memory_lock = Lock()
_memory_records: dict[str, str] = {}


def reset_memory_store() -> None:
    with _memory_lock:
        _memory_records.clear()


@contextmanager
def open_state_store(
    *,
    backend: Optional[str] = None,
    namespace: Optional[str] = None,
) -> Iterator[StateStore]:
    """
    Yields the configured store for the duration of one invocation.
    """
    backend = (backend or settings.STATE_BACKEND or "memory").strip().lower()
    namespace = namespace or settings.STATE_NAMESPACE or DEFAULT_NAMESPACE

    if backend == "memory":
        with _memory_lock:
            yield MemoryStateStore(namespace, _memory_records)
        return

    if backend == "postgres":
        from db import get_conn

        with get_conn() as conn:
            yield PostgresStateStore(conn, namespace)
        return

    logger.error("unknown state backend=%s", backend)
    raise RuntimeError(f"Unsupported STATE_BACKEND: {backend}")
