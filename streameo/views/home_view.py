"""Home view - load a playlist from a URL, a file or the sample."""
import logging
import flet as ft
from typing import Awaitable, Callable, Optional
from ..models.playlist import Playlist
from ..services.m3u_parser import M3UParser, PlaylistLoadError
from ..services.state_manager import StateManager
from ..theme import Palette

logger = logging.getLogger(__name__)


class HomeView(ft.Container):
    """Start screen with the three playlist sources."""

    def __init__(
        self,
        state_manager: StateManager,
        palette: Palette,
        on_playlist_loaded: Optional[Callable[[Playlist], None]] = None,
        on_theme_toggle: Optional[Callable] = None,
    ):
        super().__init__()
        self._state = state_manager
        self._palette = palette
        self._on_playlist_loaded = on_playlist_loaded
        self._on_theme_toggle = on_theme_toggle
        self._is_loading = False

        self._build_ui()

    def _build_ui(self):
        """Build the home view."""
        self._title = ft.Text("StreameoIPTV", size=36, weight=ft.FontWeight.BOLD)
        self._subtitle = ft.Text("Your Modern IPTV Player", size=16)

        self._url_field = ft.TextField(
            hint_text="Enter M3U Playlist URL",
            value=self._state.get_last_url(),
            keyboard_type=ft.KeyboardType.URL,
            autofocus=True,
            border_radius=8,
            on_submit=self._load_from_url,
        )

        self._buttons = [
            ft.ElevatedButton(text="Load from URL", on_click=self._load_from_url),
            ft.ElevatedButton(text="Load from File", on_click=self._pick_file),
            ft.ElevatedButton(text="Load Sample Playlist", on_click=self._load_sample),
        ]

        self._progress = ft.ProgressRing(width=32, height=32, visible=False)
        self._status_text = ft.Text("", size=13, text_align=ft.TextAlign.CENTER)

        self._theme_button = ft.IconButton(
            icon=ft.Icons.DARK_MODE_ROUNDED,
            tooltip="Toggle theme",
            on_click=self._toggle_theme,
        )

        self._file_picker = ft.FilePicker(on_result=self._on_file_picked)

        self.content = ft.Column(
            [
                ft.Row([self._theme_button], alignment=ft.MainAxisAlignment.END),
                ft.Column(
                    [
                        self._title,
                        self._subtitle,
                        ft.Container(height=24),
                        self._url_field,
                        *self._buttons,
                        ft.Container(height=8),
                        self._progress,
                        self._status_text,
                    ],
                    spacing=12,
                    horizontal_alignment=ft.CrossAxisAlignment.STRETCH,
                    alignment=ft.MainAxisAlignment.CENTER,
                    expand=True,
                ),
            ],
            expand=True,
        )
        self.padding = ft.padding.all(20)
        self.expand = True
        self._apply_palette()

    def did_mount(self):
        self.page.overlay.append(self._file_picker)
        self.page.update()

    def will_unmount(self):
        if self._file_picker in self.page.overlay:
            self.page.overlay.remove(self._file_picker)

    def _apply_palette(self):
        p = self._palette
        self.bgcolor = p.background
        self._title.color = p.text
        self._subtitle.color = p.subtle_text
        self._url_field.bgcolor = p.secondary
        self._url_field.color = p.text
        self._url_field.border_color = p.border
        self._url_field.hint_style = ft.TextStyle(color=p.placeholder)
        self._theme_button.icon_color = p.text
        for button in self._buttons:
            button.bgcolor = p.primary
            button.color = "#ffffff"

    def set_palette(self, palette: Palette):
        self._palette = palette
        self._apply_palette()

    def _set_status(self, message: str, error: bool = False):
        self._status_text.value = message
        self._status_text.color = self._palette.danger if error else self._palette.subtle_text

    def _show_save_error(self, ex: OSError):
        if self.page:
            self.page.open(ft.SnackBar(content=ft.Text(f"Failed to save settings: {ex}")))

    def _toggle_theme(self, e):
        if not self._on_theme_toggle:
            return
        try:
            self._on_theme_toggle()
        except OSError as ex:
            self._show_save_error(ex)

    def _set_loading(self, loading: bool):
        self._is_loading = loading
        self._progress.visible = loading
        for button in self._buttons:
            button.disabled = loading
        if self.page:
            self.page.update()

    async def _handle_load(self, loader: Callable[[], Awaitable[Optional[Playlist]]], remember_url: str = ""):
        """Run a loader and hand a non-empty playlist to the app."""
        if self._is_loading:
            return
        self._set_status("")
        self._set_loading(True)
        try:
            playlist = await loader()
            if playlist is None:
                return
            if playlist.is_empty():
                self._set_status("Empty Playlist: the loaded playlist is empty or could not be parsed.", error=True)
                return
            if remember_url:
                try:
                    self._state.set_last_url(remember_url)
                except OSError as ex:
                    # Still show the playlist; only remembering the URL failed
                    self._show_save_error(ex)
            logger.info("Loaded %d channels from %s", len(playlist), playlist.source)
            if self._on_playlist_loaded:
                self._on_playlist_loaded(playlist)
        except PlaylistLoadError as ex:
            logger.error("Failed to load playlist: %s", ex)
            self._set_status(f"Failed to load playlist: {ex}", error=True)
        finally:
            self._set_loading(False)

    async def _load_from_url(self, e):
        url = (self._url_field.value or "").strip()
        if not url:
            self._set_status("Invalid URL: please enter a valid playlist URL.", error=True)
            self.update()
            return

        async def loader():
            return await M3UParser.parse_from_url(url)

        await self._handle_load(loader, remember_url=url)

    def _pick_file(self, e):
        self._file_picker.pick_files(allow_multiple=False, dialog_title="Open M3U playlist")

    async def _on_file_picked(self, e: ft.FilePickerResultEvent):
        """Handle file picker result."""
        if not e.files:
            return
        path = e.files[0].path

        async def loader():
            return await M3UParser.parse_from_file(path)

        await self._handle_load(loader)

    async def _load_sample(self, e):
        async def loader():
            return M3UParser.load_sample()

        await self._handle_load(loader)
