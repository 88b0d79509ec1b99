import pytest

from core.classify import (
    JSON_CONTENT_TYPE,
    PLAYLIST_CONTENT_TYPE,
    RULES,
    TEXT_CONTENT_TYPE,
    XML_CONTENT_TYPE,
    classify_content_type,
)


@pytest.mark.parametrize(
    ("content_type", "url", "body"),
    [
        ("application/json", "http://a.test/", "x"),
        ("", "http://a.test/player_api.php?action=get_live_streams", "x"),
        ("", "http://a.test/panel_api.php", "x"),
        (None, "http://a.test/", '{"user_info":{}}'),
        ("", "http://a.test/", "  \n [1, 2]"),
    ],
)
def test_json_signals(content_type, url, body):
    assert classify_content_type(content_type, url, body) == JSON_CONTENT_TYPE


@pytest.mark.parametrize(
    ("content_type", "url", "body"),
    [
        ("text/xml", "http://a.test/", "x"),
        ("", "http://a.test/xmltv.php", "x"),
        ("", "http://a.test/", "\n<?xml version='1.0'?><tv/>"),
    ],
)
def test_xml_signals(content_type, url, body):
    assert classify_content_type(content_type, url, body) == XML_CONTENT_TYPE


@pytest.mark.parametrize(
    ("content_type", "url", "body"),
    [
        ("application/x-mpegurl", "http://a.test/", "x"),
        ("", "http://a.test/list.m3u", "x"),
        ("text/plain", "http://a.test/list.m3u8", "#EXTM3U\n#EXTINF:-1,One"),
        ("", "http://a.test/get.php", "#EXTM3U"),
    ],
)
def test_playlist_signals(content_type, url, body):
    assert classify_content_type(content_type, url, body) == PLAYLIST_CONTENT_TYPE


def test_fallback_is_plain_text():
    assert classify_content_type("text/html", "http://a.test/", "<html></html>") == TEXT_CONTENT_TYPE


def test_json_beats_xml_and_playlist():
    assert classify_content_type("", "http://a.test/xmltv.php", "{}") == JSON_CONTENT_TYPE
    assert classify_content_type("", "http://a.test/list.m3u", "[]") == JSON_CONTENT_TYPE
    assert classify_content_type("application/xml", "http://a.test/", "{}") == JSON_CONTENT_TYPE


def test_xml_beats_playlist():
    assert classify_content_type("", "http://a.test/xmltv.m3u", "#EXTM3U") == XML_CONTENT_TYPE


def test_url_suffix_must_be_at_end():
    assert classify_content_type("", "http://a.test/list.m3u?x=1", "data") == TEXT_CONTENT_TYPE


def test_rule_order():
    assert [rule.name for rule in RULES] == ["json", "xml", "playlist"]
