# app/contract/handlers.py
from __future__ import annotations

from dataclasses import replace

from app.contract import guard
from app.contract.effects import Response, action_log, coins, send_tokens
from app.contract.errors import ContractErr
from app.contract.messages import (
    ChangeBeneficiary,
    Command,
    InitMsg,
    Lock,
    TransferOwnership,
    UnLock,
    UpdateEcostate,
)
from app.contract.model import Env, State
from app.contract.payout import calculate_payout

Transition = tuple[State, Response]


def instantiate(env: Env, msg: InitMsg) -> Transition:
    state = State(
        region=msg.region,
        beneficiary=msg.beneficiary,
        owner=env.sender,
        oracle=msg.oracle,
        ecostate=msg.ecostate,
        total_tokens=msg.total_tokens,
        released_tokens=0,
        # stored only; no handler reads it
        payout_start_height=msg.payout_start_height,
        payout_end_height=msg.payout_end_height,
        is_locked=False,
    )
    if state.is_expired(env):
        raise ContractErr("creating expired contract")
    return state, Response()


def execute(state: State, env: Env, cmd: Command, *, denom: str = "utree") -> Transition:
    """
    Apply one command to `state`. Returns the new state and the effects to
    emit once it is persisted. Raises ContractError without touching `state`.
    """
    if isinstance(cmd, UpdateEcostate):
        return try_payout(state, env, cmd.ecostate, denom=denom)
    if isinstance(cmd, Lock):
        return try_lock(state, env)
    if isinstance(cmd, UnLock):
        return try_unlock(state, env)
    if isinstance(cmd, ChangeBeneficiary):
        return try_change_beneficiary(state, env, cmd.beneficiary)
    if isinstance(cmd, TransferOwnership):
        return try_transfer_ownership(state, env, cmd.owner)
    raise TypeError(f"unsupported command: {type(cmd).__name__}")


def try_payout(state: State, env: Env, ecostate: int, *, denom: str = "utree") -> Transition:
    guard.assert_can_update_ecostate(state, env)

    if state.is_locked:
        raise ContractErr("contract is locked. no payout possible")

    available = state.available
    if available <= 0:
        raise ContractErr("No more funds available")

    tokens = calculate_payout(state.ecostate, ecostate)
    if tokens == 0:
        raise ContractErr("Not enough improvement for payout")

    if tokens > available:
        amount = available
        released = state.total_tokens
    else:
        amount = tokens
        released = state.released_tokens + tokens

    new_state = replace(state, ecostate=ecostate, released_tokens=released)
    response = send_tokens(
        from_address=env.contract_address,
        to_address=new_state.beneficiary,
        amount=coins(amount, denom),
        action="payout",
    )
    return new_state, response


def try_lock(state: State, env: Env) -> Transition:
    guard.assert_can_lock(state, env)
    if state.is_locked:
        raise ContractErr("contract already locked")
    return replace(state, is_locked=True), action_log("lock", env.sender)


def try_unlock(state: State, env: Env) -> Transition:
    guard.assert_can_unlock(state, env)
    if not state.is_locked:
        raise ContractErr("contract already unlocked")
    return replace(state, is_locked=False), action_log("unlock", env.sender)


def try_change_beneficiary(state: State, env: Env, beneficiary: str) -> Transition:
    guard.assert_can_change_beneficiary(state, env)
    return replace(state, beneficiary=beneficiary), action_log("change_beneficiary", env.sender)


def try_transfer_ownership(state: State, env: Env, owner: str) -> Transition:
    guard.assert_can_transfer_ownership(state, env)
    return replace(state, owner=owner), action_log("change_owner", env.sender)
