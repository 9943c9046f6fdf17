# deps/invocation.py
from fastapi import Header, HTTPException

from app.contract.model import Env
from settings import settings


def get_invocation_env(
    x_sender: str | None = Header(default=None, alias="X-Sender"),
    x_block_height: str | None = Header(default=None, alias="X-Block-Height"),
) -> Env:
    """
    The host supplies who is calling and at which block height.
    """
    sender = (x_sender or "").strip()
    if not sender:
        raise HTTPException(status_code=401, detail="SENDER_REQUIRED")

    try:
        height = int((x_block_height or "").strip())
    except ValueError:
        raise HTTPException(status_code=422, detail="INVALID_BLOCK_HEIGHT")
    if height < 0:
        raise HTTPException(status_code=422, detail="INVALID_BLOCK_HEIGHT")

    return Env(sender=sender, block_height=height, contract_address=settings.CONTRACT_ADDRESS)
