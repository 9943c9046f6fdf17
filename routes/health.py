from __future__ import annotations

import os

from fastapi import APIRouter
from fastapi.responses import Response

from services.metrics import render_prometheus
from settings import settings

router = APIRouter(tags=["health"])


def _check_store() -> tuple[bool, str | None]:
    if settings.STATE_BACKEND != "postgres":
        return True, None
    try:
        from db import ping

        ping()
        return True, None
    except Exception as exc:
        return False, f"{type(exc).__name__}: {exc}"


def _resolve_env() -> str:
    return (os.getenv("ENVIRONMENT") or settings.ENV or "").strip()


def _resolve_git_sha() -> str | None:
    return (
        (os.getenv("FLY_IMAGE_REF") or "").strip()
        or (os.getenv("GIT_SHA") or "").strip()
        or None
    )


@router.get("/healthz")
def healthz():
    store_ok, store_error = _check_store()
    return {
        "ok": True,
        "version": os.getenv("APP_VERSION", "1.0.0"),
        "git_sha": _resolve_git_sha(),
        "state_backend": settings.STATE_BACKEND,
        "store_ok": store_ok,
        "store_error": store_error,
    }


@router.get("/health")
def health():
    return {
        "ok": True,
        "env": _resolve_env(),
        "state_backend": settings.STATE_BACKEND,
        "git_sha": _resolve_git_sha(),
    }


@router.get("/metrics", tags=["metrics"])
def metrics():
    body = render_prometheus()
    return Response(content=body, media_type="text/plain; version=0.0.4")
