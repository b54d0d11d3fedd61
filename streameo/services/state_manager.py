"""State management service for the IPTV player."""
import json
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional
from ..models.channel import Channel
from . import organizer

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "STREAMEO_DATA_DIR"


class StateManager:
    """Holds favorites and settings and persists them as JSON."""

    def __init__(self, data_dir: Optional[str] = None):
        """Initialize state manager."""
        if data_dir:
            self.data_dir = Path(data_dir)
        elif os.environ.get(DATA_DIR_ENV):
            self.data_dir = Path(os.environ[DATA_DIR_ENV])
        else:
            self.data_dir = Path.home() / ".streameo"

        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._favorites_file = self.data_dir / "favorites.json"
        self._settings_file = self.data_dir / "settings.json"

        # In-memory state
        self._favorites: List[Channel] = []
        self._settings: dict = {}

        # Callbacks
        self._on_favorites_change: List[Callable] = []
        self._on_theme_change: List[Callable] = []

        self._load_data()

    def _load_data(self):
        """Load persisted data from files."""
        data = self._read_json(self._favorites_file)
        favorites = data.get("favorites", []) if isinstance(data, dict) else []
        self._favorites = [
            Channel.from_dict(item) for item in favorites
            if isinstance(item, dict) and item.get("url")
        ]

        data = self._read_json(self._settings_file)
        self._settings = data if isinstance(data, dict) else {}

    def _read_json(self, path: Path):
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", path, e)
            return None

    def _write_json(self, path: Path, data):
        """Write a state file, logging and re-raising failures."""
        try:
            path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to save state file %s: %s", path, e)
            raise

    # Favorites management
    def get_favorites(self) -> List[Channel]:
        """Get the current favorite set."""
        return list(self._favorites)

    def set_favorites(self, channels: Iterable[Channel]):
        """Replace the favorite set. Memory is only updated once saved."""
        favorites = list(channels)
        self._write_json(self._favorites_file, {"favorites": [ch.to_dict() for ch in favorites]})
        self._favorites = favorites
        self._notify(self._on_favorites_change)

    def is_favorite(self, channel: Channel) -> bool:
        """Check if a channel is a favorite."""
        return organizer.is_favorite(self._favorites, channel)

    def toggle_favorite(self, channel: Channel) -> bool:
        """Toggle favorite status of a channel, returning the new status."""
        self.set_favorites(organizer.toggle_favorite(self._favorites, channel))
        return self.is_favorite(channel)

    def clear_favorites(self):
        """Clear all favorites."""
        self.set_favorites([])

    # Settings
    def get_setting(self, key: str, default=None):
        """Get a setting value."""
        return self._settings.get(key, default)

    def set_setting(self, key: str, value):
        """Set a setting value."""
        settings = {**self._settings, key: value}
        self._write_json(self._settings_file, settings)
        self._settings = settings

    def get_last_url(self) -> str:
        """URL of the last playlist that loaded successfully."""
        return self.get_setting("last_url", "")

    def set_last_url(self, url: str):
        self.set_setting("last_url", url)

    # Theme
    def is_dark_mode(self) -> bool:
        return self.get_setting("theme", "dark") != "light"

    def toggle_theme(self) -> bool:
        """Switch between dark and light theme, returning True for dark."""
        dark = not self.is_dark_mode()
        self.set_setting("theme", "dark" if dark else "light")
        self._notify(self._on_theme_change)
        return dark

    # Callbacks
    def on_favorites_change(self, callback: Callable):
        """Register callback for favorites changes."""
        self._on_favorites_change.append(callback)

    def on_theme_change(self, callback: Callable):
        """Register callback for theme changes."""
        self._on_theme_change.append(callback)

    def _notify(self, callbacks: List[Callable]):
        for callback in callbacks:
            callback()
