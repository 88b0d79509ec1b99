"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_health, handle_proxy
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.target import TargetResolver
from services.forwarding_service import ForwardingService
from services.upstream import UpstreamClient

# Any method is answered; non-POST methods are forwarded as GET.
PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(
            max_connections=config.upstream.max_connections,
            max_keepalive_connections=config.upstream.max_keepalive_connections,
        )
        client = httpx.AsyncClient(
            timeout=config.upstream.timeout,
            limits=limits,
            follow_redirects=True,
            transport=transport,
        )
        app.state.forwarding_service = ForwardingService(
            config=config,
            upstream=UpstreamClient(client, timeout=config.upstream.timeout),
            resolver=TargetResolver(),
            header_builder=HeaderBuilder(config),
        )
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(title="StreamVault Proxy", version="3.2.0", lifespan=lifespan)

    @app.get("/health")
    async def health(request: Request):
        return await handle_health(request)

    @app.api_route(config.proxy.path, methods=PROXY_METHODS)
    async def proxy(request: Request):
        return await handle_proxy(request, logger)

    if config.proxy.path != "/":
        @app.api_route("/", methods=PROXY_METHODS)
        async def proxy_root(request: Request):
            return await handle_proxy(request, logger)

    return app
