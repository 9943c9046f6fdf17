# app/contract/errors.py
from __future__ import annotations


class ContractError(Exception):
    """
    Base for every failure an invocation can end in.
    Any ContractError aborts the invocation; nothing is persisted or emitted.
    """

    code = "CONTRACT_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(ContractError):
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "unauthorized"):
        super().__init__(message)


class ContractErr(ContractError):
    """Business rule violation (expired, locked, no funds, no improvement)."""

    code = "CONTRACT_ERROR"


class StorageFailure(ContractErr):
    code = "STORAGE_FAILURE"

    def __init__(self, message: str = "couldn't save updated state"):
        super().__init__(message)


class NotFound(ContractError):
    code = "NOT_FOUND"

    def __init__(self, kind: str):
        super().__init__(f"{kind} not found")
        self.kind = kind


class QueryNotImplemented(NotFound):
    code = "NOT_IMPLEMENTED"

    def __init__(self):
        super().__init__("not implemented")
