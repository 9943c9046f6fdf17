# app/contract/contract.py
from __future__ import annotations

import logging
from typing import Any

from app.contract import handlers
from app.contract.effects import Response
from app.contract.errors import ContractErr, ContractError, QueryNotImplemented, StorageFailure
from app.contract.messages import Command, InitMsg, parse_execute_msg, parse_query_msg
from app.contract.model import Env, State
from app.contract.store import StateStore
from services.metrics import increment_contract_invocation, increment_tokens_released
from settings import settings

logger = logging.getLogger("ecopayout.contract")


def _action_name(cmd: Any) -> str:
    return type(cmd).__name__.lower()


def _persist(store: StateStore, state: State, *, create: bool = False) -> None:
    """
    Write and commit. Nothing counts as persisted until the commit returns.
    """
    try:
        if create:
            written = store.create(state)
        else:
            store.save(state)
            written = True
        if written:
            store.commit()
    except Exception as exc:
        logger.warning("state save failed err=%s", exc)
        raise StorageFailure() from exc

    if not written:
        raise ContractErr("contract already initialized")


def _released(response: Response) -> int:
    total = 0
    for m in response.messages:
        for c in m.amount:
            total += int(c.amount)
    return total


def instantiate(store: StateStore, env: Env, msg: InitMsg) -> Response:
    try:
        if store.exists():
            raise ContractErr("contract already initialized")
        state, response = handlers.instantiate(env, msg)
        _persist(store, state, create=True)
    except ContractError as exc:
        increment_contract_invocation("instantiate", exc.code.lower())
        logger.info("contract instantiate rejected sender=%s code=%s msg=%s", env.sender, exc.code, exc.message)
        raise

    increment_contract_invocation("instantiate", "ok")
    logger.info(
        "contract instantiated owner=%s oracle=%s beneficiary=%s total_tokens=%s payout_end_height=%s",
        state.owner,
        state.oracle,
        state.beneficiary,
        state.total_tokens,
        state.payout_end_height,
    )
    return response


def execute(store: StateStore, env: Env, cmd: Command | dict[str, Any]) -> Response:
    """
    Load -> transition -> save -> effects. Effects are only returned once the
    new state has been committed; any error leaves the stored record untouched.

    `cmd` is a Command or its raw tagged form, e.g. {"lock": {}}.
    """
    if isinstance(cmd, dict):
        cmd = parse_execute_msg(cmd)
    action = _action_name(cmd)
    try:
        state = store.load()
        new_state, response = handlers.execute(state, env, cmd, denom=settings.PAYOUT_DENOM)
        _persist(store, new_state)
    except ContractError as exc:
        increment_contract_invocation(action, exc.code.lower())
        logger.info(
            "contract execute rejected action=%s sender=%s code=%s msg=%s",
            action,
            env.sender,
            exc.code,
            exc.message,
        )
        raise

    released = _released(response)
    if released:
        increment_tokens_released(settings.PAYOUT_DENOM, released)

    increment_contract_invocation(action, "ok")
    logger.info(
        "contract executed action=%s sender=%s released_tokens=%s/%s locked=%s",
        action,
        env.sender,
        new_state.released_tokens,
        new_state.total_tokens,
        new_state.is_locked,
    )
    return response


def query(msg: Any) -> bytes:
    """
    Declared query surface. Requests are validated but never answered and no
    state is read.
    """
    if isinstance(msg, dict):
        msg = parse_query_msg(msg)
    increment_contract_invocation("query", "not_implemented")
    raise QueryNotImplemented()
