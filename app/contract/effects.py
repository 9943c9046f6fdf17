# app/contract/effects.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

DEFAULT_DENOM = "utree"


@dataclass(frozen=True)
class Coin:
    amount: str  # integer as string
    denom: str

    def to_dict(self) -> dict[str, str]:
        return {"amount": self.amount, "denom": self.denom}


@dataclass(frozen=True)
class BankSend:
    from_address: str
    to_address: str
    amount: list[Coin]

    def to_dict(self) -> dict[str, Any]:
        return {
            "send": {
                "from_address": self.from_address,
                "to_address": self.to_address,
                "amount": [c.to_dict() for c in self.amount],
            }
        }


@dataclass(frozen=True)
class LogAttribute:
    key: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "value": self.value}


@dataclass(frozen=True)
class Response:
    messages: list[BankSend] = field(default_factory=list)
    log: list[LogAttribute] = field(default_factory=list)
    data: Optional[bytes] = None

    def attribute(self, key: str) -> Optional[str]:
        for attr in self.log:
            if attr.key == key:
                return attr.value
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "messages": [m.to_dict() for m in self.messages],
            "log": [a.to_dict() for a in self.log],
            "data": self.data.decode("utf-8") if self.data is not None else None,
        }


def coins(amount: int, denom: str = DEFAULT_DENOM) -> list[Coin]:
    return [Coin(amount=str(int(amount)), denom=denom)]


def send_tokens(
    *,
    from_address: str,
    to_address: str,
    amount: list[Coin],
    action: str,
) -> Response:
    """
    Single bank transfer plus `action` / `to` log attributes.
    """
    return Response(
        messages=[BankSend(from_address=from_address, to_address=to_address, amount=amount)],
        log=[LogAttribute("action", action), LogAttribute("to", to_address)],
    )


def action_log(action: str, account: str) -> Response:
    return Response(log=[LogAttribute("action", action), LogAttribute("account", account)])
