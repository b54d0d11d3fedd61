"""Light and dark colour palettes."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    background: str
    primary: str
    secondary: str
    text: str
    subtle_text: str
    border: str
    placeholder: str
    danger: str
    header: str
    favorite: str
    favorite_disabled: str


LIGHT = Palette(
    background="#ffffff",
    primary="#1e90ff",
    secondary="#f0f0f0",
    text="#000000",
    subtle_text="#555555",
    border="#dddddd",
    placeholder="#888888",
    danger="#dc3545",
    header="#f8f8f8",
    favorite="#ffd700",
    favorite_disabled="#cccccc",
)

DARK = Palette(
    background="#121212",
    primary="#1e90ff",
    secondary="#1a1a1a",
    text="#ffffff",
    subtle_text="#aaaaaa",
    border="#333333",
    placeholder="#888888",
    danger="#dc3545",
    header="#121212",
    favorite="#ffd700",
    favorite_disabled="#444444",
)


def get_palette(dark: bool) -> Palette:
    return DARK if dark else LIGHT
