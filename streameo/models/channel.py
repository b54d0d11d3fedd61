"""Channel model for IPTV channels."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Channel:
    """Represents one playable playlist entry.

    ``logo``, ``id`` and ``group`` are ``None`` when the source did not set
    them; an empty string means the attribute was present but empty.
    """

    title: str
    url: str
    logo: Optional[str] = None
    id: Optional[str] = None
    group: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert channel to dictionary for serialization."""
        return {
            "title": self.title,
            "url": self.url,
            "logo": self.logo,
            "id": self.id,
            "group": self.group,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Channel":
        """Create channel from dictionary."""
        url = data.get("url") or ""
        return cls(
            title=data.get("title") or url,
            url=url,
            logo=data.get("logo"),
            id=data.get("id"),
            group=data.get("group"),
        )
