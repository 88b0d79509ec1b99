"""Forwarding orchestration for proxy requests."""

from dataclasses import dataclass

from core.classify import classify_content_type
from core.config import Config
from core.exceptions import RequestTooLarge
from core.headers import HeaderBuilder
from core.request_types import PreparedRequest
from core.target import TargetResolver
from services.upstream import UpstreamClient


@dataclass(frozen=True)
class ForwardedResponse:
    """Upstream body ready to relay to the caller."""

    target_url: str
    content_type: str
    headers: dict[str, str]
    body: str


class ForwardingService:
    """Validate, fetch, and classify one proxied request."""

    def __init__(
        self,
        config: Config,
        upstream: UpstreamClient,
        resolver: TargetResolver,
        header_builder: HeaderBuilder,
    ) -> None:
        self._config = config
        self._upstream = upstream
        self._resolver = resolver
        self._headers = header_builder

    def target_url(self, query: str) -> str:
        """Look up and validate the ``url`` parameter of a raw query string."""
        return self._resolver.resolve(self._resolver.lookup(query))

    def prepare(self, method: str, target_url: str, body: bytes | None = None) -> PreparedRequest:
        """Build the upstream request for a validated target URL."""
        upstream_method = self._resolver.upstream_method(method)

        content = None
        if upstream_method == "POST" and body:
            if len(body) > self._config.limits.max_body_size:
                raise RequestTooLarge("Request body too large")
            content = body

        return PreparedRequest(
            method=upstream_method,
            target_url=target_url,
            headers=self._headers.build_upstream_headers(),
            body=content,
        )

    async def forward(self, prepared: PreparedRequest) -> ForwardedResponse:
        """Fetch the target and pick the relayed content type."""
        result = await self._upstream.fetch(prepared)
        content_type = classify_content_type(result.content_type, prepared.target_url, result.text)
        return ForwardedResponse(
            target_url=prepared.target_url,
            content_type=content_type,
            headers=self._headers.build_success_headers(content_type),
            body=result.text,
        )
