"""Search, grouping and favorites over a list of channels.

Everything here is a pure function: inputs are never mutated and every call
returns a freshly built value.
"""
from typing import Iterable, List, Optional, Sequence, Tuple
from ..models.channel import Channel

DEFAULT_GROUP = "Uncategorized"

GroupView = List[Tuple[str, List[Channel]]]


def filter_channels(channels: Sequence[Channel], query: Optional[str]) -> Sequence[Channel]:
    """Case-insensitive title search. An empty query returns the input as is."""
    if not query:
        return channels
    query = query.lower()
    return [ch for ch in channels if query in ch.title.lower()]


def group_label(channel: Channel) -> str:
    """Display label for a channel; empty and missing groups look the same."""
    return channel.group or DEFAULT_GROUP


def group_channels(channels: Iterable[Channel]) -> GroupView:
    """Group channels by label, keeping first-seen label order."""
    groups = {}
    for channel in channels:
        groups.setdefault(group_label(channel), []).append(channel)
    return list(groups.items())


def is_favorite(favorites: Iterable[Channel], channel: Channel) -> bool:
    """Check favorite membership by url."""
    return any(fav.url == channel.url for fav in favorites)


def toggle_favorite(favorites: Iterable[Channel], channel: Channel) -> List[Channel]:
    """Return a new favorites list with the channel added or removed.

    Removal drops every entry sharing the channel's url, so a list holding
    duplicates still ends up "not favorite" after one toggle.
    """
    favorites = list(favorites)
    if is_favorite(favorites, channel):
        return [fav for fav in favorites if fav.url != channel.url]
    return favorites + [channel]


def favorite_channels(channels: Iterable[Channel], favorites: Iterable[Channel]) -> List[Channel]:
    """Channels whose url is in the favorites, in playlist order."""
    favorite_urls = {fav.url for fav in favorites}
    return [ch for ch in channels if ch.url in favorite_urls]


def build_group_view(
    channels: Sequence[Channel],
    query: Optional[str] = None,
    favorites: Iterable[Channel] = (),
    favorites_only: bool = False,
) -> GroupView:
    """Search, optionally keep favorites only, then group."""
    visible = filter_channels(channels, query)
    if favorites_only:
        visible = favorite_channels(visible, favorites)
    return group_channels(visible)
