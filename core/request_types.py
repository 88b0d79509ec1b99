"""Shared request data types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request."""

    method: str
    target_url: str
    headers: dict[str, str]
    body: bytes | None = None


@dataclass(frozen=True)
class UpstreamResult:
    """Buffered 2xx upstream response."""

    content_type: str
    text: str
