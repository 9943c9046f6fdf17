# schemas.py
from __future__ import annotations

from pydantic import BaseModel
from typing import Optional, List


# -------- CONTRACT RESPONSES --------
class CoinItem(BaseModel):
    amount: str
    denom: str


class SendItem(BaseModel):
    from_address: str
    to_address: str
    amount: List[CoinItem]


class CosmosMsgItem(BaseModel):
    send: SendItem


class LogItem(BaseModel):
    key: str
    value: str


class ContractResponse(BaseModel):
    messages: List[CosmosMsgItem] = []
    log: List[LogItem] = []
    data: Optional[str] = None


class ErrorResponse(BaseModel):
    detail: str
