"""Parse and proxy endpoints consumed by the web client."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response, StreamingResponse
from pydantic import BaseModel

from vidrelay.domain.entities.video import (
    AllStrategiesExhausted,
    IdentifierNotFound,
    InputInvalid,
    ProxyTransportFault,
    ResolutionError,
)
from vidrelay.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["video"])

# Error class -> HTTP status.  Bad links are client errors, upstream
# failures are gateway errors.
_ERROR_STATUS: dict[type[ResolutionError], int] = {
    InputInvalid: 400,
    IdentifierNotFound: 400,
    AllStrategiesExhausted: 502,
    ProxyTransportFault: 502,
}


class ParseRequest(BaseModel):
    url: str | None = None


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": message},
        status_code=status_code,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and wrongly typed fields get the same 400 shape."""
    log.info("request_invalid", path=request.url.path, errors=len(exc.errors()))
    return _error_response(400, InputInvalid.public_message)


@router.post("/api/parse")
async def parse_video(body: ParseRequest, request: Request) -> JSONResponse:
    """Resolve pasted share text into a watermark-free video URL.

    Returns ``{"success": true, "data": {url, cover, desc, isDemo?}}``.
    """
    state = cast(AppState, request.app.state)

    if not body.url or not body.url.strip():
        return _error_response(400, InputInvalid.public_message)

    try:
        info = await state.resolve_video_uc.execute(body.url)
    except ResolutionError as exc:
        status = _ERROR_STATUS.get(type(exc), 502)
        log.warning("parse_failed", error_type=type(exc).__name__, status=status)
        return _error_response(status, str(exc))
    except Exception:
        log.exception("parse_unhandled_error")
        return _error_response(500, "Video resolution failed: internal error")

    return JSONResponse({"success": True, "data": info.to_payload()})


@router.get("/api/proxy")
async def proxy_video(
    request: Request,
    url: str | None = Query(default=None),
    download: bool = Query(default=True),
) -> Response:
    """Stream a resolved media URL through this server.

    ``download=0`` switches the disposition to ``inline`` for in-page
    preview; the filename is fixed either way.
    """
    state = cast(AppState, request.app.state)

    if not url:
        return _error_response(400, "URL parameter is required")

    try:
        body_iter, meta = await state.media_proxy.open(url)
    except ProxyTransportFault as exc:
        return _error_response(502, str(exc))

    log.info(
        "proxy_streaming",
        content_type=meta.content_type,
        content_length=meta.content_length,
        download=download,
    )
    return StreamingResponse(
        body_iter,
        media_type=meta.content_type,
        headers=meta.response_headers(download=download),
    )
