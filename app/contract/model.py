# app/contract/model.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class State:
    region: str
    beneficiary: str
    owner: str
    oracle: str
    ecostate: int
    total_tokens: int
    released_tokens: int
    payout_start_height: int
    payout_end_height: int
    is_locked: bool

    @property
    def available(self) -> int:
        return self.total_tokens - self.released_tokens

    def is_expired(self, env: "Env") -> bool:
        return env.block_height > self.payout_end_height

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "State":
        return cls(
            region=str(data["region"]),
            beneficiary=str(data["beneficiary"]),
            owner=str(data["owner"]),
            oracle=str(data["oracle"]),
            ecostate=int(data["ecostate"]),
            total_tokens=int(data["total_tokens"]),
            released_tokens=int(data["released_tokens"]),
            payout_start_height=int(data["payout_start_height"]),
            payout_end_height=int(data["payout_end_height"]),
            is_locked=bool(data["is_locked"]),
        )


@dataclass(frozen=True)
class Env:
    """Invocation context supplied by the host."""

    sender: str
    block_height: int
    contract_address: str
