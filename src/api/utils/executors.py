"""Run blocking bridge calls off the event loop and map their errors to HTTP."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from fastapi import HTTPException

from api.schemas import ErrorDetail
from mq_bridge.errors import BridgeError, EngineNotFoundError

T = TypeVar("T")


def http_error(exc: BridgeError) -> HTTPException:
    status_code = 503 if isinstance(exc, EngineNotFoundError) else 400
    return HTTPException(status_code=status_code, detail=ErrorDetail(code=exc.code, message=str(exc)).model_dump())


async def run_bridge_call(func: Callable[..., T], /, *args: Any) -> T:
    """Execute *func* in a worker thread, raising bridge failures as HTTP errors."""

    try:
        return await asyncio.to_thread(func, *args)
    except BridgeError as exc:
        raise http_error(exc) from exc


__all__ = ["http_error", "run_bridge_call"]
