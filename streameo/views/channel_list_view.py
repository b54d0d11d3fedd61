"""Channel list view - header plus the grouped channel list."""
import flet as ft
from typing import Callable, Optional
from ..components.channel_list import ChannelList
from ..models.channel import Channel
from ..models.playlist import Playlist
from ..services.state_manager import StateManager
from ..theme import Palette


class ChannelListView(ft.Container):
    """Browse the channels of the loaded playlist."""

    def __init__(
        self,
        state_manager: StateManager,
        palette: Palette,
        on_channel_select: Optional[Callable[[Channel], None]] = None,
        on_back: Optional[Callable] = None,
    ):
        super().__init__()
        self._palette = palette
        self._on_back = on_back

        self._channel_list = ChannelList(
            state_manager=state_manager,
            palette=palette,
            on_channel_select=on_channel_select,
        )
        self._build_ui()

    def _build_ui(self):
        self._back_button = ft.IconButton(
            icon=ft.Icons.ARROW_BACK_ROUNDED,
            tooltip="Back",
            on_click=lambda e: self._on_back and self._on_back(),
        )
        self._title = ft.Text("Channels", size=20, weight=ft.FontWeight.BOLD)
        self._header = ft.Container(
            content=ft.Row([self._back_button, self._title], spacing=15),
            padding=ft.padding.symmetric(horizontal=15, vertical=10),
        )

        self.content = ft.Column(
            [
                self._header,
                ft.Container(height=8),
                self._channel_list,
            ],
            spacing=0,
            expand=True,
        )
        self.expand = True
        self._apply_palette()

    def _apply_palette(self):
        p = self._palette
        self.bgcolor = p.background
        self._title.color = p.text
        self._back_button.icon_color = p.text
        self._header.bgcolor = p.header
        self._header.border = ft.border.only(bottom=ft.BorderSide(1, p.border))

    def set_palette(self, palette: Palette):
        self._palette = palette
        self._apply_palette()
        self._channel_list.set_palette(palette)

    def set_playlist(self, playlist: Playlist):
        self._title.value = playlist.name
        self._channel_list.set_playlist(playlist)

    def refresh(self):
        self._channel_list.refresh()
