# tests/conftest.py

from contextlib import contextmanager
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from app.contract import contract
from app.contract.messages import InitMsg
from app.contract.model import Env, State
from app.contract.store import MemoryStateStore, reset_memory_store
from main import create_app
from services.metrics import reset_metrics
from settings import settings


OWNER = "cosmos1owner"
ORACLE = "cosmos1oracle"
BENEFICIARY = "cosmos1beneficiary"
STRANGER = "cosmos1stranger"
CONTRACT_ADDRESS = "cosmos1contract"

START_HEIGHT = 100
END_HEIGHT = 1_000


def make_env(sender: str, height: int = START_HEIGHT) -> Env:
    return Env(sender=sender, block_height=height, contract_address=CONTRACT_ADDRESS)


def init_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "region": "black-forest",
        "beneficiary": BENEFICIARY,
        "oracle": ORACLE,
        "ecostate": 4000,
        "total_tokens": 1000,
        "payout_start_height": START_HEIGHT,
        "payout_end_height": END_HEIGHT,
    }
    payload.update(overrides)
    return payload


def make_state(**overrides: Any) -> State:
    fields = {
        "region": "black-forest",
        "beneficiary": BENEFICIARY,
        "owner": OWNER,
        "oracle": ORACLE,
        "ecostate": 4000,
        "total_tokens": 1000,
        "released_tokens": 0,
        "payout_start_height": START_HEIGHT,
        "payout_end_height": END_HEIGHT,
        "is_locked": False,
    }
    fields.update(overrides)
    return State(**fields)


# ---------------------------
# Isolation
# ---------------------------

@pytest.fixture(autouse=True)
def _isolated_contract(monkeypatch):
    monkeypatch.setattr(settings, "STATE_BACKEND", "memory", raising=False)
    monkeypatch.setattr(settings, "CONTRACT_ADDRESS", CONTRACT_ADDRESS, raising=False)
    monkeypatch.setattr(settings, "PAYOUT_DENOM", "utree", raising=False)
    reset_memory_store()
    reset_metrics()
    yield
    reset_memory_store()


# ---------------------------
# Store fixtures
# ---------------------------

@pytest.fixture()
def store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture()
def initialized_store(store: MemoryStateStore) -> MemoryStateStore:
    contract.instantiate(store, make_env(OWNER), InitMsg(**init_payload()))
    return store


# ---------------------------
# HTTP host
# ---------------------------

@pytest.fixture()
def client() -> TestClient:
    # Needed so tests can assert 500s instead of pytest re-raising server exceptions
    return TestClient(create_app(), raise_server_exceptions=False)


def invocation_headers(sender: str, height: int = START_HEIGHT) -> Dict[str, str]:
    return {"X-Sender": sender, "X-Block-Height": str(height)}


@pytest.fixture()
def instantiated_client(client: TestClient) -> TestClient:
    r = client.post(
        "/v1/contract/instantiate",
        json=init_payload(),
        headers=invocation_headers(OWNER),
    )
    assert r.status_code == 200, r.text
    return client


# ---------------------------
# Fake psycopg2 connection
# ---------------------------

class FakeCursor:
    def __init__(self, conn: "FakeConn"):
        self.conn = conn
        self.rowcount = -1

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, sql, params=()):
        self.conn.executed.append((" ".join(sql.split()), params))
        self.rowcount = self.conn.rowcount

    def fetchone(self):
        return self.conn.rows.pop(0) if self.conn.rows else None


class FakeConn:
    def __init__(self, rows=None, rowcount: int = 1, commit_error: Exception | None = None):
        self.rows = list(rows or [])
        self.rowcount = rowcount
        self.commit_error = commit_error
        self.commits = 0
        self.rollbacks = 0
        self.executed: list[tuple[str, tuple]] = []

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        if self.commit_error is not None:
            raise self.commit_error
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


def fake_get_conn(conn: FakeConn):
    """Stand-in for db.get_conn: rollback on error, commit (again) on success."""

    @contextmanager
    def _get_conn():
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    return _get_conn
