"""Main application module."""
import flet as ft
from .models.channel import Channel
from .models.playlist import Playlist
from .services.state_manager import StateManager
from .theme import get_palette
from .views.channel_list_view import ChannelListView
from .views.home_view import HomeView
from .views.player_view import PlayerView


class StreameoApp:
    """Main IPTV player application with stack-based navigation."""

    def __init__(self, page: ft.Page, state: StateManager = None):
        self.page = page
        self.state = state or StateManager()
        self._current_view = "home"
        self._navigation_stack = []  # For back navigation

        self._setup_page()
        self._setup_views()
        self.state.on_favorites_change(self._on_favorites_change)
        self.state.on_theme_change(self._on_theme_change)
        self._show_view("home", push=False)

    def _setup_page(self):
        """Configure the page settings."""
        self.page.title = "StreameoIPTV"
        self.page.padding = 0
        self.page.spacing = 0

        # Window settings
        self.page.window.width = 1280
        self.page.window.height = 720
        self.page.window.min_width = 400
        self.page.window.min_height = 600

        self._apply_page_theme()

        # Keyboard handler for global shortcuts
        self.page.on_keyboard_event = self._on_keyboard

    def _apply_page_theme(self):
        dark = self.state.is_dark_mode()
        palette = get_palette(dark)
        self.page.theme_mode = ft.ThemeMode.DARK if dark else ft.ThemeMode.LIGHT
        self.page.bgcolor = palette.background
        self.page.theme = ft.Theme(color_scheme_seed=palette.primary)

    def _setup_views(self):
        """Initialize all views."""
        palette = get_palette(self.state.is_dark_mode())

        self._home_view = HomeView(
            state_manager=self.state,
            palette=palette,
            on_playlist_loaded=self._on_playlist_loaded,
            on_theme_toggle=self.state.toggle_theme,
        )
        self._channel_list_view = ChannelListView(
            state_manager=self.state,
            palette=palette,
            on_channel_select=self._on_channel_select,
            on_back=self._go_back,
        )
        self._player_view = PlayerView(
            state_manager=self.state,
            palette=palette,
            on_back=self._go_back,
        )
        self._views = {
            "home": self._home_view,
            "channels": self._channel_list_view,
            "player": self._player_view,
        }

        self._container = ft.Container(
            content=self._home_view,
            expand=True,
            animate_opacity=ft.Animation(200, ft.AnimationCurve.EASE_OUT),
        )
        self.page.add(self._container)

    def _show_view(self, name: str, push: bool = True):
        """Switch to a view with a fade transition."""
        if push:
            self._navigation_stack.append(self._current_view)
        self._current_view = name

        self._container.opacity = 0
        self._container.update()
        self._container.content = self._views[name]
        self._container.opacity = 1
        self.page.update()

    def _go_back(self):
        """Navigate back."""
        if self._current_view == "player":
            self._player_view.stop()
        previous = self._navigation_stack.pop() if self._navigation_stack else "home"
        self._show_view(previous, push=False)

    def _on_playlist_loaded(self, playlist: Playlist):
        self._navigation_stack = []
        self._channel_list_view.set_playlist(playlist)
        self._show_view("channels")

    def _on_channel_select(self, channel: Channel):
        self._show_view("player")
        self._player_view.play_channel(channel)

    def _on_favorites_change(self):
        self._channel_list_view.refresh()
        self._player_view.refresh()

    def _on_theme_change(self):
        palette = get_palette(self.state.is_dark_mode())
        self._apply_page_theme()
        for view in self._views.values():
            view.set_palette(palette)
        self.page.update()

    def _on_keyboard(self, e: ft.KeyboardEvent):
        """Handle global keyboard events."""
        if e.key in ("Escape", "Backspace") and self._current_view != "home":
            self._go_back()


def main(page: ft.Page):
    """Application entry point."""
    StreameoApp(page)
