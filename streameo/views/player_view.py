"""Player view - full screen video player."""
import flet as ft
from typing import Callable, Optional
from ..components.video_player import VideoPlayerComponent
from ..models.channel import Channel
from ..services.organizer import group_label
from ..services.state_manager import StateManager
from ..theme import Palette


class PlayerView(ft.Container):
    """Full screen video player view."""

    def __init__(
        self,
        state_manager: StateManager,
        palette: Palette,
        on_back: Optional[Callable] = None,
    ):
        super().__init__()
        self._state = state_manager
        self._palette = palette
        self._on_back = on_back
        self._channel: Optional[Channel] = None

        self._video_player = VideoPlayerComponent(on_error=self._on_video_error)

        self._channel_name_text = ft.Text(
            "Select a channel",
            size=16,
            weight=ft.FontWeight.BOLD,
            max_lines=1,
            overflow=ft.TextOverflow.ELLIPSIS,
        )
        self._channel_group_text = ft.Text("", size=12)

        self._favorite_button = ft.IconButton(
            icon=ft.Icons.STAR_BORDER_ROUNDED,
            icon_size=24,
            tooltip="Add to favorites",
            on_click=self._toggle_favorite,
        )

        self._build_ui()

    def _build_ui(self):
        """Build the player view."""
        self._back_button = ft.IconButton(
            icon=ft.Icons.ARROW_BACK_ROUNDED,
            icon_size=24,
            tooltip="Back to channels",
            on_click=self._handle_back_click,
        )
        self._header = ft.Container(
            content=ft.Row(
                [
                    ft.Row(
                        [
                            self._back_button,
                            ft.Column(
                                [self._channel_name_text, self._channel_group_text],
                                spacing=2,
                            ),
                        ],
                        spacing=12,
                    ),
                    self._favorite_button,
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            padding=ft.padding.symmetric(horizontal=16, vertical=8),
        )

        self.content = ft.Column(
            [
                self._header,
                ft.Container(content=self._video_player, expand=True, bgcolor="#000000"),
            ],
            expand=True,
            spacing=0,
        )
        self.expand = True
        self._apply_palette()

    def _apply_palette(self):
        p = self._palette
        self.bgcolor = p.background
        self._header.bgcolor = p.header
        self._back_button.icon_color = p.text
        self._channel_name_text.color = p.text
        self._channel_group_text.color = p.subtle_text
        self._update_favorite_button()

    def set_palette(self, palette: Palette):
        self._palette = palette
        self._apply_palette()

    def play_channel(self, channel: Channel):
        """Start playing a channel."""
        self._channel = channel
        self._channel_name_text.value = channel.title
        self._channel_group_text.value = group_label(channel)
        self._update_favorite_button()
        self._video_player.play_channel(channel)

    def refresh(self):
        self._update_favorite_button()
        if self.page:
            self.update()

    def stop(self):
        self._video_player.stop()

    def _update_favorite_button(self):
        favorite = self._channel is not None and self._state.is_favorite(self._channel)
        self._favorite_button.icon = ft.Icons.STAR_ROUNDED if favorite else ft.Icons.STAR_BORDER_ROUNDED
        self._favorite_button.icon_color = self._palette.favorite if favorite else self._palette.favorite_disabled
        self._favorite_button.tooltip = "Remove from favorites" if favorite else "Add to favorites"

    def _toggle_favorite(self, e):
        if not self._channel:
            return
        try:
            self._state.toggle_favorite(self._channel)
        except OSError as ex:
            if self.page:
                self.page.open(ft.SnackBar(content=ft.Text(f"Failed to save favorites: {ex}")))

    def _handle_back_click(self, e):
        """Stop playback and navigate back."""
        self.stop()
        if self._on_back:
            self._on_back()

    def _on_video_error(self, message: str):
        if self.page:
            self.page.open(ft.SnackBar(content=ft.Text(f"Video Error: {message}")))
