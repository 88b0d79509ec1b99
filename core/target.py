"""Target URL resolution - decides what gets forwarded upstream."""

import re
from urllib.parse import parse_qsl, unquote

from core.exceptions import InvalidUrlError, MalformedUrlError, MissingUrlError

ALLOWED_PREFIXES = ("http://", "https://")

# "%" not followed by two hex digits
MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class TargetResolver:
    """Validate the ``url`` query parameter and pick the upstream method."""

    def lookup(self, query: str, name: str = "url") -> str | None:
        """Return the first ``name`` value from a raw query string, if present."""
        try:
            params = parse_qsl(query, keep_blank_values=True, errors="strict")
        except UnicodeDecodeError:
            raise MalformedUrlError() from None
        return next((value for key, value in params if key == name), None)

    def resolve(self, url: str | None) -> str:
        """Return the decoded target URL or raise a ProxyError."""
        if not url:
            raise MissingUrlError()
        # Query values arrive decoded once already; clients encode the target
        # a second time, so decode again before validating.
        if MALFORMED_ESCAPE.search(url):
            raise MalformedUrlError()
        try:
            target_url = unquote(url, errors="strict")
        except UnicodeDecodeError:
            raise MalformedUrlError() from None
        if not target_url.startswith(ALLOWED_PREFIXES):
            raise InvalidUrlError()
        return target_url

    @staticmethod
    def upstream_method(method: str) -> str:
        """POST is forwarded as POST; everything else becomes GET."""
        return "POST" if method.upper() == "POST" else "GET"
