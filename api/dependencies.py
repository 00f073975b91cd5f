import asyncio
import functools
import logging
from datetime import datetime
from typing import Any, Callable

from fastapi import HTTPException, Request

from backend.exceptions import AuthError, BackendError, NotFoundError
from backend.manager import BackendManager
from models.round import utc_now

logger = logging.getLogger(__name__)


def get_backend(request: Request) -> BackendManager:
    """FastAPI dependency: repositories acting on behalf of the calling user."""
    return BackendManager.for_caller(request.app.state.backend, request.headers)


def get_clock() -> Callable[[], datetime]:
    """FastAPI dependency for "now"; overridden in tests."""
    return utc_now


def to_http_error(e: BackendError) -> HTTPException:
    if isinstance(e, AuthError):
        return HTTPException(401, str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(404, str(e))
    logger.error("Backend request failed: %s", e, exc_info=e)
    return HTTPException(502, f"Golf backend error: {e}")


async def call_backend(func: Callable[..., Any], *args, **kwargs) -> Any:
    """Run a blocking repository call off the event loop, mapping backend errors to HTTP."""
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))
    except BackendError as e:
        raise to_http_error(e) from e
