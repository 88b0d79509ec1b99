"""Content-type detection for relayed upstream bodies."""

from collections.abc import Callable
from dataclasses import dataclass

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
XML_CONTENT_TYPE = "application/xml; charset=utf-8"
PLAYLIST_CONTENT_TYPE = "application/vnd.apple.mpegurl; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


@dataclass(frozen=True)
class BodySample:
    """Inputs inspected by the classification rules."""

    content_type: str
    target_url: str
    body: str

    @property
    def head(self) -> str:
        return self.body.lstrip()


@dataclass(frozen=True)
class ClassificationRule:
    """A named predicate and the content type it yields."""

    name: str
    matches: Callable[[BodySample], bool]
    content_type: str


def _is_json(sample: BodySample) -> bool:
    return (
        "json" in sample.content_type
        or "player_api.php" in sample.target_url
        or "panel_api.php" in sample.target_url
        or sample.head.startswith("{")
        or sample.head.startswith("[")
    )


def _is_xml(sample: BodySample) -> bool:
    return (
        "xml" in sample.content_type
        or "xmltv" in sample.target_url
        or sample.head.startswith("<?xml")
    )


def _is_playlist(sample: BodySample) -> bool:
    return (
        "mpegurl" in sample.content_type
        or sample.target_url.endswith(".m3u")
        or sample.target_url.endswith(".m3u8")
        or sample.head.startswith("#EXTM3U")
    )


# Order matters: first match wins, so JSON signals beat XML and playlist ones.
RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("json", _is_json, JSON_CONTENT_TYPE),
    ClassificationRule("xml", _is_xml, XML_CONTENT_TYPE),
    ClassificationRule("playlist", _is_playlist, PLAYLIST_CONTENT_TYPE),
)


def classify_content_type(
    content_type: str | None,
    target_url: str,
    body: str,
    rules: tuple[ClassificationRule, ...] = RULES,
) -> str:
    """Return the Content-Type to relay ``body`` with.

    Args:
        content_type: Upstream ``content-type`` header, if any.
        target_url: Decoded URL the body was fetched from.
        body: Upstream body text.
        rules: Ordered rule table, evaluated first-match.

    Returns:
        The content type of the first matching rule, or plain text.
    """
    sample = BodySample(content_type or "", target_url, body)
    for rule in rules:
        if rule.matches(sample):
            return rule.content_type
    return TEXT_CONTENT_TYPE
