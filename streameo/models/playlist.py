"""Playlist model for M3U playlists."""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple
from .channel import Channel
from ..services import organizer


@dataclass
class Playlist:
    """Represents a parsed M3U playlist, channels in source order."""

    name: str
    source: str  # URL, file path or "sample"
    channels: List[Channel] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.channels)

    def is_empty(self) -> bool:
        """True when parsing produced no channels."""
        return not self.channels

    def get_groups(self) -> List[str]:
        """Get group labels in first-seen order."""
        return [label for label, _ in organizer.group_channels(self.channels)]

    def get_channels_by_group(self, group: str) -> List[Channel]:
        """Get channels displayed under a group label."""
        return [ch for ch in self.channels if organizer.group_label(ch) == group]

    def search_channels(self, query: Optional[str]) -> List[Channel]:
        """Search channels by title."""
        return list(organizer.filter_channels(self.channels, query))

    def group_view(
        self,
        query: Optional[str] = None,
        favorites: Iterable[Channel] = (),
        favorites_only: bool = False,
    ) -> List[Tuple[str, List[Channel]]]:
        """Build the grouped view for the current search and favorites."""
        return organizer.build_group_view(
            self.channels,
            query=query,
            favorites=favorites,
            favorites_only=favorites_only,
        )

    def to_dict(self) -> dict:
        """Convert playlist to dictionary for serialization."""
        return {
            "name": self.name,
            "source": self.source,
            "channels": [ch.to_dict() for ch in self.channels],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Playlist":
        """Create playlist from dictionary."""
        return cls(
            name=data.get("name", "Unknown Playlist"),
            source=data.get("source", ""),
            channels=[
                Channel.from_dict(ch) for ch in data.get("channels", [])
                if ch.get("url")
            ],
        )
