# services/contract_errors.py
from __future__ import annotations

from fastapi import HTTPException

from app.contract.errors import ContractError

CONTRACT_ERROR_HTTP_MAP: dict[str, int] = {
    "UNAUTHORIZED": 401,
    "CONTRACT_ERROR": 400,
    "STORAGE_FAILURE": 500,
    "NOT_FOUND": 404,
    "NOT_IMPLEMENTED": 404,
}

# codes whose message is safe to hand back to the caller verbatim
_PUBLIC_MESSAGE_CODES = {"CONTRACT_ERROR"}


def http_status_for(exc: Exception) -> int:
    code = getattr(exc, "code", None)
    if isinstance(exc, ContractError) and code in CONTRACT_ERROR_HTTP_MAP:
        return CONTRACT_ERROR_HTTP_MAP[code]
    return 500


def detail_for(exc: Exception) -> str:
    if not isinstance(exc, ContractError):
        return "Internal server error"
    if exc.code in _PUBLIC_MESSAGE_CODES:
        return exc.message
    return exc.code


def raise_http_from_contract_error(exc: Exception) -> None:
    """
    Convert contract failures into HTTP responses; anything else fails closed.
    """
    raise HTTPException(status_code=http_status_for(exc), detail=detail_for(exc))
