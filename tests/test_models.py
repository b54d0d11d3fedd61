"""Tests for the Channel and Playlist models."""

import dataclasses

import pytest

from streameo.models.channel import Channel
from streameo.models.playlist import Playlist


@pytest.fixture
def playlist() -> Playlist:
    return Playlist(
        name="Test",
        source="http://example.com/list.m3u",
        channels=[
            Channel(title="Sport 1", url="http://s1", group="Sports"),
            Channel(title="News 1", url="http://n1", group="News"),
            Channel(title="Misc", url="http://m", group=""),
            Channel(title="Sport 2", url="http://s2", group="Sports"),
        ],
    )


def test_channel_is_immutable() -> None:
    channel = Channel(title="A", url="http://a")

    with pytest.raises(dataclasses.FrozenInstanceError):
        channel.title = "B"


def test_channel_dict_round_trip_keeps_absent_fields() -> None:
    channel = Channel(title="A", url="http://a", logo="", group="G")

    restored = Channel.from_dict(channel.to_dict())

    assert restored == channel
    assert restored.logo == ""
    assert restored.id is None


def test_channel_from_dict_without_title_uses_url() -> None:
    assert Channel.from_dict({"url": "http://a"}).title == "http://a"


def test_playlist_groups_in_first_seen_order(playlist: Playlist) -> None:
    assert playlist.get_groups() == ["Sports", "News", "Uncategorized"]


def test_playlist_channels_by_group(playlist: Playlist) -> None:
    assert [ch.title for ch in playlist.get_channels_by_group("Sports")] == ["Sport 1", "Sport 2"]
    assert [ch.title for ch in playlist.get_channels_by_group("Uncategorized")] == ["Misc"]


def test_playlist_search(playlist: Playlist) -> None:
    assert [ch.title for ch in playlist.search_channels("SPORT")] == ["Sport 1", "Sport 2"]
    assert playlist.search_channels("") == playlist.channels


def test_playlist_group_view(playlist: Playlist) -> None:
    favorites = [Channel(title="fav", url="http://n1")]

    view = playlist.group_view(query="1", favorites=favorites, favorites_only=True)

    assert view == [("News", [playlist.channels[1]])]


def test_playlist_len_and_empty(playlist: Playlist) -> None:
    assert len(playlist) == 4
    assert not playlist.is_empty()
    assert Playlist(name="Empty", source="").is_empty()


def test_playlist_from_dict_skips_entries_without_url(playlist: Playlist) -> None:
    data = playlist.to_dict()
    data["channels"].append({"title": "Broken"})

    restored = Playlist.from_dict(data)

    assert restored.channels == playlist.channels
    assert restored.name == "Test"
