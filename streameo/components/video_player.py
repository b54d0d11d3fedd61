"""Video player component backed by flet-video."""
import logging
import flet as ft
import flet_video as fv
from typing import Callable, Optional
from ..models.channel import Channel

logger = logging.getLogger(__name__)


class VideoPlayerComponent(ft.Container):
    """Plays one channel at a time with native controls."""

    def __init__(self, on_error: Optional[Callable[[str], None]] = None):
        super().__init__()
        self._on_error = on_error
        self._current_channel: Optional[Channel] = None
        self._is_playing = False
        self._build_ui()

    def _build_ui(self):
        self._video = fv.Video(
            expand=True,
            fill_color="#000000",
            aspect_ratio=16/9,
            autoplay=True,
            show_controls=True,
            fit=ft.ImageFit.CONTAIN,
            on_loaded=self._on_video_loaded,
            on_error=self._on_video_error,
        )

        self._loading_indicator = ft.Container(
            content=ft.ProgressRing(width=40, height=40),
            alignment=ft.alignment.center,
            expand=True,
            visible=False,
        )

        self.content = ft.Stack([self._video, self._loading_indicator], expand=True)
        self.expand = True
        self.bgcolor = "#000000"

    def play_channel(self, channel: Channel):
        """Replace whatever is playing with the channel's stream."""
        self._current_channel = channel
        self._loading_indicator.visible = True
        if self.page:
            self.page.update()

        try:
            self._video.stop()
            # Clear the playlist so the new stream is the only item
            for _ in range(len(self._video.playlist or [])):
                self._video.playlist_remove(0)
            self._video.playlist_add(fv.VideoMedia(resource=channel.url))
            self._video.jump_to(0)
            self._video.play()
            self._is_playing = True
        except Exception as e:
            logger.exception("Failed to start playback of %s", channel.url)
            self._loading_indicator.visible = False
            if self._on_error:
                self._on_error(str(e))

        if self.page:
            self.page.update()

    def stop(self):
        """Stop playback."""
        if self._is_playing:
            self._video.pause()
        self._is_playing = False
        self._loading_indicator.visible = False
        if self.page:
            self.page.update()

    def _on_video_loaded(self, e):
        self._loading_indicator.visible = False
        if self.page:
            self.page.update()

    def _on_video_error(self, e):
        """Handle video error event."""
        logger.warning("Video error for %s: %s", self._current_channel and self._current_channel.url, e.data)
        self._loading_indicator.visible = False
        if self._on_error:
            self._on_error("Failed to load stream")
        if self.page:
            self.page.update()
