"""POST /api — single entry point for every client action.

Body: ``{"action": <name>, "payload": {...}}``. Unknown actions are rejected
with 400 before any handler runs; any handler failure becomes a 500 whose
body carries the failure message. Other HTTP verbs get a bare 405.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from bff.errors import InvalidActionError
from bff.gateway import Gateway, get_gateway, parse_action
from bff.models import ErrorBody

logger = logging.getLogger(__name__)

router = APIRouter(tags=["gateway"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorBody(error=message).model_dump())


@router.post("", responses={400: {"model": ErrorBody}, 500: {"model": ErrorBody}})
async def handle_action(request: Request, gateway: Gateway = Depends(get_gateway)):
    try:
        envelope = await request.json()
    except ValueError:
        return _error(400, "Invalid request body")
    if not isinstance(envelope, dict):
        return _error(400, "Invalid request body")

    try:
        action = parse_action(envelope.get("action"))
    except InvalidActionError as exc:
        logger.info("Rejected unknown action %r", exc.action)
        return _error(400, exc.message)

    try:
        result = await gateway.dispatch(action, envelope.get("payload"))
    except Exception as exc:
        logger.exception("Action %s failed", action.value)
        return _error(500, str(exc) or "An internal server error occurred.")

    return JSONResponse(content=result)


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Answer any non-POST verb on /api with a bare 405; defer everything else."""
    if exc.status_code == 405 and request.url.path.rstrip("/") == "/api":
        return Response(status_code=405, headers={"Allow": "POST"})
    return await http_exception_handler(request, exc)
