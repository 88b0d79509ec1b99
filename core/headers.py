"""Header construction for proxy responses and upstream requests."""

from core.config import Config

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Accept",
}


class HeaderBuilder:
    """Build headers for the caller and for the upstream server."""

    def __init__(self, config: Config) -> None:
        self._config = config

    def build_success_headers(self, content_type: str) -> dict[str, str]:
        """Headers for a relayed 2xx upstream body."""
        headers = dict(CORS_HEADERS)
        headers["Content-Type"] = content_type
        headers["Cache-Control"] = self._config.cache.cache_control
        return headers

    def build_upstream_headers(self) -> dict[str, str]:
        """Fixed upstream headers; inbound headers are never passed through."""
        return {
            "User-Agent": self._config.upstream.user_agent,
            "Accept": self._config.upstream.accept,
        }
