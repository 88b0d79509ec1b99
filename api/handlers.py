"""FastAPI route handlers."""

import time

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from core.exceptions import ProxyError
from core.headers import CORS_HEADERS
from core.protocols import RequestLogger
from services.forwarding_service import ForwardingService


def _error_response(error: ProxyError) -> JSONResponse:
    return JSONResponse(
        content={"error": error.message},
        status_code=error.status_code,
        headers=CORS_HEADERS,
    )


async def handle_proxy(request: Request, logger: RequestLogger) -> Response:
    """Handle the proxy endpoint: preflight, validation, forwarding."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    service: ForwardingService = request.app.state.forwarding_service
    target_url = None
    started = time.monotonic()

    try:
        target_url = service.target_url(request.url.query)
        body = await request.body() if request.method == "POST" else None
        prepared = service.prepare(request.method, target_url, body)
        forwarded = await service.forward(prepared)
    except ProxyError as e:
        logged_url = target_url or request.query_params.get("url") or "-"
        logger.log_error(logged_url, e.status_code, e.message)
        return _error_response(e)

    logger.log_request(
        prepared.method,
        forwarded.target_url,
        200,
        forwarded.content_type,
        elapsed=time.monotonic() - started,
    )
    return Response(content=forwarded.body, status_code=200, headers=forwarded.headers)


async def handle_health(_request: Request) -> Response:
    """Liveness probe for the hosting runtime."""
    return JSONResponse(content={"status": "ok"}, headers=CORS_HEADERS)
