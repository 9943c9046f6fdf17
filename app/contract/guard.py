# app/contract/guard.py
from __future__ import annotations

from app.contract.errors import Unauthorized
from app.contract.model import Env, State


def _require_signer(expected: str, env: Env) -> None:
    if env.sender != expected:
        raise Unauthorized()


def assert_can_update_ecostate(state: State, env: Env) -> None:
    _require_signer(state.oracle, env)


def assert_can_lock(state: State, env: Env) -> None:
    _require_signer(state.owner, env)


def assert_can_unlock(state: State, env: Env) -> None:
    _require_signer(state.owner, env)


def assert_can_change_beneficiary(state: State, env: Env) -> None:
    """
    The current beneficiary authorizes its own replacement (not the owner).
    """
    _require_signer(state.beneficiary, env)


def assert_can_transfer_ownership(state: State, env: Env) -> None:
    _require_signer(state.owner, env)
