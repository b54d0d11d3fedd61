"""Tests for loading playlists from URLs, files and the bundled sample."""

import asyncio
from pathlib import Path

import httpx
import pytest

from streameo.services.m3u_parser import M3UParser, PlaylistLoadError

PLAYLIST_TEXT = "#EXTM3U\n#EXTINF:-1 group-title=\"News\",Channel One\nhttp://example.com/one.m3u8\n"


@pytest.fixture(autouse=True)
def no_retry_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(M3UParser, "RETRY_DELAY", 0)


def test_parse_from_url() -> None:
    """Test a successful download is parsed and named after the URL path."""
    progress = []

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=PLAYLIST_TEXT.encode())

    playlist = asyncio.run(
        M3UParser.parse_from_url(
            "http://example.com/lists/world.m3u",
            progress_callback=lambda done, total: progress.append((done, total)),
            transport=httpx.MockTransport(handler),
        )
    )

    assert playlist.name == "world"
    assert playlist.source == "http://example.com/lists/world.m3u"
    assert [ch.title for ch in playlist.channels] == ["Channel One"]
    assert progress[-1] == (len(PLAYLIST_TEXT), len(PLAYLIST_TEXT))


def test_parse_from_url_name_falls_back_to_host() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=PLAYLIST_TEXT.encode())

    playlist = asyncio.run(
        M3UParser.parse_from_url("http://iptv.example.com/get", transport=httpx.MockTransport(handler))
    )

    assert playlist.name == "iptv.example.com"


def test_parse_from_url_retries_transport_errors() -> None:
    """Test connection errors are retried until a response arrives."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) < 2:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, content=PLAYLIST_TEXT.encode())

    playlist = asyncio.run(
        M3UParser.parse_from_url("http://example.com/list.m3u", transport=httpx.MockTransport(handler))
    )

    assert len(calls) == 2
    assert len(playlist) == 1


def test_parse_from_url_gives_up_after_max_retries() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(PlaylistLoadError, match="Timeout"):
        asyncio.run(
            M3UParser.parse_from_url("http://example.com/list.m3u", transport=httpx.MockTransport(handler))
        )

    assert len(calls) == M3UParser.MAX_RETRIES


def test_parse_from_url_http_error_is_not_retried() -> None:
    """Test HTTP status errors fail immediately."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(404)

    with pytest.raises(PlaylistLoadError, match="HTTP 404"):
        asyncio.run(
            M3UParser.parse_from_url("http://example.com/list.m3u", transport=httpx.MockTransport(handler))
        )

    assert len(calls) == 1


def test_parse_from_url_empty_body_is_empty_playlist() -> None:
    """Test an empty download is a valid empty playlist, not an error."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"")

    playlist = asyncio.run(
        M3UParser.parse_from_url("http://example.com/list.m3u", transport=httpx.MockTransport(handler))
    )

    assert playlist.is_empty()


def test_parse_from_file(tmp_path: Path) -> None:
    path = tmp_path / "favourites.m3u8"
    path.write_text(PLAYLIST_TEXT, encoding="utf-8")

    playlist = asyncio.run(M3UParser.parse_from_file(str(path)))

    assert playlist.name == "favourites"
    assert playlist.source == str(path)
    assert playlist.channels[0].group == "News"


def test_parse_from_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PlaylistLoadError, match="Failed to read file"):
        asyncio.run(M3UParser.parse_from_file(str(tmp_path / "missing.m3u")))


def test_load_sample() -> None:
    playlist = M3UParser.load_sample()

    assert playlist.source == "sample"
    assert [ch.group for ch in playlist.channels] == ["News", "Movies"]
    assert playlist.channels[0].title == "Sintel (HLS)"
    assert playlist.channels[1].url.endswith("BigBuckBunny.mp4")


def test_parse_from_file_with_byte_order_mark(tmp_path: Path) -> None:
    """Test a BOM-prefixed file yields only the real channel."""
    path = tmp_path / "bom.m3u"
    path.write_bytes(b"\xef\xbb\xbf" + PLAYLIST_TEXT.encode("utf-8"))

    playlist = asyncio.run(M3UParser.parse_from_file(str(path)))

    assert [ch.title for ch in playlist.channels] == ["Channel One"]


def test_parse_from_url_with_byte_order_mark() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"\xef\xbb\xbf" + PLAYLIST_TEXT.encode("utf-8"))

    playlist = asyncio.run(
        M3UParser.parse_from_url("http://example.com/list.m3u", transport=httpx.MockTransport(handler))
    )

    assert [ch.title for ch in playlist.channels] == ["Channel One"]


def test_parse_from_url_invalid_url() -> None:
    """Test a malformed URL is reported as a load error without any request."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, content=PLAYLIST_TEXT.encode())

    with pytest.raises(PlaylistLoadError, match="Invalid URL"):
        asyncio.run(
            M3UParser.parse_from_url("http://[::1/list.m3u", transport=httpx.MockTransport(handler))
        )

    assert calls == []
