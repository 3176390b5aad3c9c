from __future__ import annotations

from urllib.parse import urlparse

import pytest

from src.config.env import StreamConfig
from src.utils.stream_urls import CUSTOMER_CODE_MISSING, StreamUrls, generate_stream_urls

SUFFIXES = {
    "player_url": "/iframe",
    "hls_url": "/manifest/video.m3u8",
    "dash_url": "/manifest/video.mpd",
    "watch_url": "/watch",
}


def test_generates_all_four_urls():
    urls = generate_stream_urls("input-42", "abc123")

    assert urls == StreamUrls(
        player_url="https://customer-abc123.cloudflarestream.com/input-42/iframe",
        hls_url="https://customer-abc123.cloudflarestream.com/input-42/manifest/video.m3u8",
        dash_url="https://customer-abc123.cloudflarestream.com/input-42/manifest/video.mpd",
        watch_url="https://customer-abc123.cloudflarestream.com/input-42/watch",
    )
    assert urls.ok


@pytest.mark.parametrize("input_id, code", [("a1b2c3", "xyz"), ("f00d" * 8, "cust-9")])
def test_urls_are_deterministic_and_parseable(input_id, code):
    first = generate_stream_urls(input_id, code)
    assert first == generate_stream_urls(input_id, code)

    for field, suffix in SUFFIXES.items():
        url = getattr(first, field)
        parsed = urlparse(url)
        assert parsed.scheme == "https"
        assert parsed.netloc == f"customer-{code}.cloudflarestream.com"
        assert parsed.path == f"/{input_id}{suffix}"


def test_empty_code_returns_error_without_urls():
    urls = generate_stream_urls("input-42", "", config=StreamConfig())

    assert urls.error == CUSTOMER_CODE_MISSING
    assert not urls.ok
    assert urls.player_url is urls.hls_url is urls.dash_url is urls.watch_url is None
    assert urls.to_dict() == {
        "playerUrl": None,
        "hlsUrl": None,
        "dashUrl": None,
        "watchUrl": None,
        "error": CUSTOMER_CODE_MISSING,
    }


def test_falls_back_to_config_code(config):
    urls = generate_stream_urls("input-42", config=config)

    assert urls.watch_url == "https://customer-abc123.cloudflarestream.com/input-42/watch"


def test_explicit_code_wins_over_config(config):
    urls = generate_stream_urls("input-42", "override", config=config)

    assert "customer-override." in urls.player_url


def test_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("CLOUDFLARE_CUSTOMER_CODE", "envcode")

    urls = generate_stream_urls("input-42")

    assert urls.hls_url == "https://customer-envcode.cloudflarestream.com/input-42/manifest/video.m3u8"


def test_missing_everywhere_is_an_error():
    assert generate_stream_urls("input-42").error == CUSTOMER_CODE_MISSING


def test_to_dict_uses_camel_case_keys():
    data = generate_stream_urls("vid", "c").to_dict()

    assert set(data) == {"playerUrl", "hlsUrl", "dashUrl", "watchUrl"}
