# routes/contract.py
from __future__ import annotations

from fastapi import APIRouter, Body, Depends

from app.contract import contract
from app.contract.errors import ContractError
from app.contract.messages import ExecuteMsg, InitMsg, QueryMsg, unwrap
from app.contract.model import Env
from app.contract.store import open_state_store
from deps.invocation import get_invocation_env
from schemas import ContractResponse, ErrorResponse
from services.contract_errors import raise_http_from_contract_error

router = APIRouter(prefix="/v1/contract", tags=["contract"])

_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.post("/instantiate", response_model=ContractResponse, responses=_ERRORS)
def instantiate_contract(
    msg: InitMsg,
    env: Env = Depends(get_invocation_env),
):
    try:
        with open_state_store() as store:
            response = contract.instantiate(store, env, msg)
    except ContractError as exc:
        raise_http_from_contract_error(exc)
    return response.to_dict()


@router.post("/execute", response_model=ContractResponse, responses=_ERRORS)
def execute_contract(
    msg: ExecuteMsg = Body(...),
    env: Env = Depends(get_invocation_env),
):
    cmd = unwrap(msg)
    try:
        with open_state_store() as store:
            response = contract.execute(store, env, cmd)
    except ContractError as exc:
        raise_http_from_contract_error(exc)
    return response.to_dict()


@router.post("/query", responses={404: {"model": ErrorResponse}})
def query_contract(msg: QueryMsg = Body(...)):
    try:
        contract.query(msg)
    except ContractError as exc:
        raise_http_from_contract_error(exc)
