"""Grouped channel list with search and favorites filter."""
import flet as ft
from typing import Callable, List, Optional, Tuple, Union
from ..models.channel import Channel
from ..models.playlist import Playlist
from ..services.state_manager import StateManager
from ..theme import Palette

# Either a group header label or a channel tile
ListRow = Union[str, Channel]


class ChannelList(ft.Container):
    """Channel list grouped by category, loaded a page at a time."""

    # Number of rows to load at a time
    PAGE_SIZE = 50

    def __init__(
        self,
        state_manager: StateManager,
        palette: Palette,
        on_channel_select: Optional[Callable[[Channel], None]] = None,
    ):
        super().__init__()
        self._state = state_manager
        self._palette = palette
        self._on_channel_select = on_channel_select
        self._playlist: Optional[Playlist] = None
        self._rows: List[ListRow] = []
        self._displayed_count = 0
        self._search_query = ""
        self._show_favorites_only = False

        self._build_ui()

    def _build_ui(self):
        """Build the channel list UI."""
        self._search_field = ft.TextField(
            hint_text="Search channels...",
            prefix_icon=ft.Icons.SEARCH_ROUNDED,
            border_radius=8,
            height=48,
            text_size=14,
            content_padding=ft.padding.only(left=12, right=12),
            on_change=self._on_search_change,
        )

        self._favorites_button = ft.IconButton(
            icon=ft.Icons.STAR_BORDER_ROUNDED,
            selected_icon=ft.Icons.STAR_ROUNDED,
            selected=False,
            tooltip="Show favorites only",
            on_click=self._toggle_favorites_filter,
        )

        self._channel_list = ft.ListView(
            spacing=2,
            padding=ft.padding.only(top=8, bottom=8),
            expand=True,
        )

        self._load_more_btn = ft.Container(
            content=ft.ElevatedButton(
                text="Load More",
                icon=ft.Icons.EXPAND_MORE_ROUNDED,
                on_click=self._load_more,
            ),
            alignment=ft.alignment.center,
            padding=ft.padding.symmetric(vertical=12),
            visible=False,
        )

        self._empty_text = ft.Text(
            "No channels found.",
            size=16,
            text_align=ft.TextAlign.CENTER,
            visible=False,
        )

        self._channel_count = ft.Text("", size=12)

        self.content = ft.Column(
            [
                ft.Row(
                    [
                        ft.Container(content=self._search_field, expand=True),
                        self._favorites_button,
                    ],
                    spacing=8,
                ),
                ft.Container(content=self._channel_count, padding=ft.padding.only(top=8)),
                ft.Container(
                    content=ft.Column(
                        [
                            self._empty_text,
                            self._channel_list,
                            self._load_more_btn,
                        ],
                        spacing=0,
                        horizontal_alignment=ft.CrossAxisAlignment.STRETCH,
                    ),
                    expand=True,
                ),
            ],
            spacing=0,
            expand=True,
        )
        self.padding = ft.padding.symmetric(horizontal=15)
        self.expand = True
        self._apply_palette()

    def _apply_palette(self):
        p = self._palette
        self._search_field.bgcolor = p.secondary
        self._search_field.color = p.text
        self._search_field.border_color = p.border
        self._search_field.focused_border_color = p.primary
        self._search_field.hint_style = ft.TextStyle(color=p.placeholder)
        self._favorites_button.icon_color = p.favorite_disabled
        self._favorites_button.selected_icon_color = p.favorite
        self._channel_count.color = p.subtle_text
        self._empty_text.color = p.subtle_text

    def set_palette(self, palette: Palette):
        self._palette = palette
        self._apply_palette()
        self.refresh()

    def set_playlist(self, playlist: Playlist):
        """Show a newly loaded playlist with filters reset."""
        self._playlist = playlist
        self._search_query = ""
        self._search_field.value = ""
        self._show_favorites_only = False
        self._favorites_button.selected = False
        self.refresh()

    def refresh(self):
        """Rebuild rows from the playlist, search text and favorites."""
        groups = []
        if self._playlist:
            groups = self._playlist.group_view(
                query=self._search_query,
                favorites=self._state.get_favorites(),
                favorites_only=self._show_favorites_only,
            )
        self._rows = self._flatten(groups)

        channel_total = sum(len(channels) for _, channels in groups)
        self._channel_count.value = f"{channel_total} channels in {len(groups)} groups"
        self._empty_text.visible = channel_total == 0

        self._channel_list.controls.clear()
        self._displayed_count = 0
        self._append_page()

    @staticmethod
    def _flatten(groups: List[Tuple[str, List[Channel]]]) -> List[ListRow]:
        rows: List[ListRow] = []
        for label, channels in groups:
            rows.append(label)
            rows.extend(channels)
        return rows

    def _append_page(self):
        start = self._displayed_count
        end = min(start + self.PAGE_SIZE, len(self._rows))
        for row in self._rows[start:end]:
            if isinstance(row, Channel):
                self._channel_list.controls.append(self._build_channel_tile(row))
            else:
                self._channel_list.controls.append(self._build_group_header(row))
        self._displayed_count = end
        self._load_more_btn.visible = self._displayed_count < len(self._rows)

        if self.page:
            self.page.update()

    def _load_more(self, e):
        """Load more rows."""
        self._append_page()

    def _build_group_header(self, label: str) -> ft.Control:
        return ft.Container(
            content=ft.Text(
                label,
                size=14,
                weight=ft.FontWeight.BOLD,
                color=self._palette.primary,
            ),
            padding=ft.padding.only(left=4, top=12, bottom=4),
        )

    def _build_channel_tile(self, channel: Channel) -> ft.Control:
        """Build a channel tile with logo or initial placeholder."""
        p = self._palette
        placeholder = ft.Text(
            channel.title[:1].upper(),
            size=20,
            weight=ft.FontWeight.BOLD,
            color=p.text,
        )
        logo = ft.Container(
            content=ft.Image(
                src=channel.logo,
                width=50,
                height=50,
                fit=ft.ImageFit.CONTAIN,
                error_content=placeholder,
            ) if channel.logo else placeholder,
            width=50,
            height=50,
            border_radius=8,
            bgcolor=p.border,
            alignment=ft.alignment.center,
        )

        favorite = self._state.is_favorite(channel)
        return ft.Container(
            content=ft.Row(
                [
                    logo,
                    ft.Text(
                        channel.title,
                        size=16,
                        color=p.text,
                        max_lines=1,
                        overflow=ft.TextOverflow.ELLIPSIS,
                        expand=True,
                    ),
                    ft.IconButton(
                        icon=ft.Icons.STAR_ROUNDED if favorite else ft.Icons.STAR_BORDER_ROUNDED,
                        icon_color=p.favorite if favorite else p.favorite_disabled,
                        icon_size=22,
                        tooltip="Remove from favorites" if favorite else "Add to favorites",
                        on_click=lambda e, ch=channel: self._toggle_favorite(ch),
                    ),
                ],
                spacing=15,
                vertical_alignment=ft.CrossAxisAlignment.CENTER,
            ),
            padding=ft.padding.all(15),
            bgcolor=p.secondary,
            border=ft.border.only(bottom=ft.BorderSide(1, p.border)),
            on_click=lambda e, ch=channel: self._select_channel(ch),
        )

    def _select_channel(self, channel: Channel):
        if self._on_channel_select:
            self._on_channel_select(channel)

    def _toggle_favorite(self, channel: Channel):
        # Rows are rebuilt by the favorites-change callback
        try:
            self._state.toggle_favorite(channel)
        except OSError as ex:
            if self.page:
                self.page.open(ft.SnackBar(content=ft.Text(f"Failed to save favorites: {ex}")))

    def _toggle_favorites_filter(self, e):
        """Toggle favorites-only filter."""
        self._show_favorites_only = not self._show_favorites_only
        self._favorites_button.selected = self._show_favorites_only
        self.refresh()

    def _on_search_change(self, e):
        self._search_query = self._search_field.value or ""
        self.refresh()
