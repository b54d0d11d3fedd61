"""StreameoIPTV - M3U playlist parsing, organizing and playback."""
__version__ = "1.0.0"
