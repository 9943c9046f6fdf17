# app/contract/messages.py
from __future__ import annotations

from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


# values are stored as signed 64-bit integers
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

Int64 = Annotated[int, Field(ge=I64_MIN, le=I64_MAX)]
NonNegativeInt64 = Annotated[int, Field(ge=0, le=I64_MAX)]


class _Msg(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class InitMsg(_Msg):
    region: str
    beneficiary: str = Field(min_length=1)
    oracle: str = Field(min_length=1)
    ecostate: Int64
    total_tokens: NonNegativeInt64
    payout_start_height: Int64
    payout_end_height: Int64


# -------- execute (externally tagged, lowercase tags) --------
class UpdateEcostate(_Msg):
    ecostate: Int64


class Lock(_Msg):
    pass


class UnLock(_Msg):
    pass


class ChangeBeneficiary(_Msg):
    beneficiary: str = Field(min_length=1)


class TransferOwnership(_Msg):
    owner: str = Field(min_length=1)


class UpdateEcostateMsg(_Msg):
    updateecostate: UpdateEcostate


class LockMsg(_Msg):
    lock: Lock


class UnLockMsg(_Msg):
    unlock: UnLock


class ChangeBeneficiaryMsg(_Msg):
    changebeneficiary: ChangeBeneficiary


class TransferOwnershipMsg(_Msg):
    transferownership: TransferOwnership


ExecuteMsg = Union[
    UpdateEcostateMsg,
    LockMsg,
    UnLockMsg,
    ChangeBeneficiaryMsg,
    TransferOwnershipMsg,
]

Command = Union[UpdateEcostate, Lock, UnLock, ChangeBeneficiary, TransferOwnership]


# -------- query (declared, never answered) --------
class StateQuery(_Msg):
    pass


class BalanceQuery(_Msg):
    address: str


class StateQueryMsg(_Msg):
    state: StateQuery


class BalanceQueryMsg(_Msg):
    balance: BalanceQuery


QueryMsg = Union[StateQueryMsg, BalanceQueryMsg]


_execute_adapter: TypeAdapter = TypeAdapter(ExecuteMsg)
_query_adapter: TypeAdapter = TypeAdapter(QueryMsg)


def parse_execute_msg(payload: Any) -> Command:
    """
    {"lock": {}} -> Lock(), {"updateecostate": {"ecostate": 5200}} -> UpdateEcostate(5200), ...
    """
    wrapper = _execute_adapter.validate_python(payload)
    return unwrap(wrapper)


def parse_query_msg(payload: Any):
    return _query_adapter.validate_python(payload)


def unwrap(wrapper: BaseModel):
    # every wrapper has exactly one field: the tag
    (tag,) = type(wrapper).model_fields.keys()
    return getattr(wrapper, tag)
