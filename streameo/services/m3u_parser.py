"""M3U playlist parser: line classification, EXTINF attributes and loaders."""
import asyncio
import enum
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional
from urllib.parse import urlparse

import aiofiles
import httpx

from ..models.channel import Channel
from ..models.playlist import Playlist

logger = logging.getLogger(__name__)

EXTINF_PREFIX = "#EXTINF"
DIRECTIVE_PREFIX = "#"
BOM = "\ufeff"

SAMPLE_PLAYLIST = """#EXTM3U
#EXTINF:-1 tvg-id="sample1" tvg-logo="https://i.imgur.com/p2LBg1x.png" group-title="News",Sintel (HLS)
https://test-streams.mux.dev/x36xhzz/x36xhzz.m3u8
#EXTINF:-1 tvg-id="sample2" tvg-logo="https://i.imgur.com/p2LBg1x.png" group-title="Movies",Big Buck Bunny (MP4)
http://commondatastorage.googleapis.com/gtv-videos-bucket/sample/BigBuckBunny.mp4
"""


class PlaylistLoadError(Exception):
    """Raised when playlist text could not be fetched or read."""


class LineKind(enum.Enum):
    BLANK = "blank"
    EXTINF = "extinf"
    DIRECTIVE = "directive"
    LOCATOR = "locator"


@dataclass(frozen=True)
class DirectiveInfo:
    """Metadata carried by one #EXTINF line."""

    title: str = ""
    logo: Optional[str] = None
    id: Optional[str] = None
    group: Optional[str] = None


def _attribute_pattern(name: str) -> "re.Pattern[str]":
    # Unterminated quotes simply do not match. A digit may precede the name
    # (attribute glued to the duration) but a letter or "-" may not.
    return re.compile(r'(?<![A-Za-z_-])' + re.escape(name) + r'="([^"]*)"', re.IGNORECASE)


ATTRIBUTE_PATTERNS = {
    "logo": _attribute_pattern("tvg-logo"),
    "id": _attribute_pattern("tvg-id"),
    "group": _attribute_pattern("group-title"),
}


def classify_line(line: str) -> LineKind:
    """Classify a trimmed playlist line."""
    if not line:
        return LineKind.BLANK
    if line.startswith(EXTINF_PREFIX):
        return LineKind.EXTINF
    if line.startswith(DIRECTIVE_PREFIX):
        return LineKind.DIRECTIVE
    return LineKind.LOCATOR


def extract_directive(payload: str) -> DirectiveInfo:
    """Extract title and known attributes from an #EXTINF payload.

    The title is whatever follows the last comma. Each attribute is looked up
    on its own, so a missing or malformed one never affects the others.
    """
    last_comma_idx = payload.rfind(",")
    title = payload[last_comma_idx + 1:].strip() if last_comma_idx != -1 else ""

    values = {}
    for key, pattern in ATTRIBUTE_PATTERNS.items():
        match = pattern.search(payload)
        values[key] = match.group(1) if match else None

    return DirectiveInfo(title=title, **values)


class PendingChannel:
    """Accumulates one channel across its #EXTINF line and locator line."""

    def __init__(self):
        self._info: Optional[DirectiveInfo] = None

    @property
    def is_pending(self) -> bool:
        return self._info is not None

    def start(self, info: DirectiveInfo) -> bool:
        """Begin a new channel. Returns True if an unterminated one was dropped."""
        dropped = self._info is not None
        self._info = info
        return dropped

    def complete(self, url: str) -> Channel:
        """Finish the pending channel with its locator and reset."""
        info = self._info or DirectiveInfo()
        self._info = None
        return Channel(
            # No title from the directive: the locator doubles as the title.
            title=info.title or url,
            url=url,
            logo=info.logo,
            id=info.id,
            group=info.group,
        )


def parse(text: Any) -> List[Channel]:
    """Parse M3U text into channels in source order.

    Non-string or empty input yields an empty list. Malformed entries are
    recovered or dropped, never reported as errors.
    """
    if not isinstance(text, str) or not text:
        return []
    # str.strip() keeps a byte order mark
    if text.startswith(BOM):
        text = text[len(BOM):]

    channels: List[Channel] = []
    pending = PendingChannel()
    discarded = 0

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        kind = classify_line(line)

        if kind is LineKind.EXTINF:
            if pending.start(extract_directive(line[len(EXTINF_PREFIX):])):
                discarded += 1
        elif kind is LineKind.LOCATOR:
            channels.append(pending.complete(line))

    if pending.is_pending:
        discarded += 1

    logger.debug("Parsed %d channels (%d unterminated entries dropped)", len(channels), discarded)
    return channels


parse_m3u = parse


class M3UParser:
    """Loads M3U playlists from URLs, files or text."""

    # Extended timeout for large files
    TIMEOUT = 120.0
    CONNECT_TIMEOUT = 30.0
    MAX_RETRIES = 3
    RETRY_DELAY = 2.0
    CHUNK_SIZE = 65536  # 64KB chunks

    @classmethod
    def parse_from_text(cls, content: str, name: str = "Playlist", source: str = "") -> Playlist:
        """Build a playlist from already available text."""
        return Playlist(name=name, source=source, channels=parse(content))

    @classmethod
    def load_sample(cls) -> Playlist:
        """Playlist built from the bundled sample."""
        return cls.parse_from_text(SAMPLE_PLAYLIST, name="Sample", source="sample")

    @classmethod
    async def parse_from_url(
        cls,
        url: str,
        progress_callback: Optional[Callable[[int, int], None]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> Playlist:
        """Download and parse an M3U playlist with retry logic."""
        content = await cls._download(url, progress_callback, transport)
        return cls.parse_from_text(
            content,
            name=cls._extract_playlist_name(url),
            source=url,
        )

    @classmethod
    async def parse_from_file(cls, file_path: str) -> Playlist:
        """Parse an M3U playlist from a local file."""
        try:
            async with aiofiles.open(file_path, "r", encoding="utf-8-sig", errors="ignore") as f:
                content = await f.read()
        except OSError as e:
            raise PlaylistLoadError(f"Failed to read file: {e}") from e

        name = os.path.splitext(os.path.basename(file_path))[0]
        return cls.parse_from_text(content, name=name or "Playlist", source=file_path)

    @classmethod
    async def _download(
        cls,
        url: str,
        progress_callback: Optional[Callable[[int, int], None]],
        transport: Optional[httpx.AsyncBaseTransport],
    ) -> str:
        try:
            request_url = httpx.URL(url)
        except (httpx.InvalidURL, ValueError) as e:
            raise PlaylistLoadError(f"Invalid URL: {e}") from e

        last_error = None

        for attempt in range(cls.MAX_RETRIES):
            try:
                timeout = httpx.Timeout(cls.TIMEOUT, connect=cls.CONNECT_TIMEOUT)
                async with httpx.AsyncClient(
                    timeout=timeout,
                    follow_redirects=True,
                    transport=transport,
                ) as client:
                    async with client.stream("GET", request_url) as response:
                        response.raise_for_status()

                        total_size = int(response.headers.get("content-length", 0))
                        downloaded = 0
                        chunks = []

                        async for chunk in response.aiter_bytes(chunk_size=cls.CHUNK_SIZE):
                            chunks.append(chunk)
                            downloaded += len(chunk)
                            if progress_callback and total_size > 0:
                                progress_callback(downloaded, total_size)

                        return b"".join(chunks).decode("utf-8-sig", errors="ignore")

            except httpx.HTTPStatusError as e:
                # Don't retry on HTTP errors
                raise PlaylistLoadError(
                    f"Failed to download playlist: HTTP {e.response.status_code}"
                ) from e
            except httpx.TimeoutException:
                last_error = f"Timeout (attempt {attempt + 1}/{cls.MAX_RETRIES})"
            except httpx.HTTPError as e:
                last_error = str(e) or e.__class__.__name__

            logger.warning("Playlist download from %s failed: %s", url, last_error)
            if attempt < cls.MAX_RETRIES - 1:
                await asyncio.sleep(cls.RETRY_DELAY)

        raise PlaylistLoadError(f"Failed to download playlist: {last_error}")

    @classmethod
    def _extract_playlist_name(cls, url: str) -> str:
        """Extract playlist name from the URL path or host."""
        parsed = urlparse(url)

        if parsed.path:
            name = os.path.splitext(os.path.basename(parsed.path))[0]
            if name and name != "get" and len(name) > 2:
                return name

        return parsed.netloc or "Playlist"
