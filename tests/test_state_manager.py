"""Tests for favorites and settings persistence."""

import json
import logging
from pathlib import Path

import pytest

from streameo.models.channel import Channel
from streameo.services.state_manager import StateManager

ONE = Channel(title="Channel One", url="http://example.com/one.m3u8", group="News")
TWO = Channel(title="Channel Two", url="http://example.com/two.mp4")


@pytest.fixture
def state(tmp_path: Path) -> StateManager:
    return StateManager(data_dir=str(tmp_path))


def test_toggle_favorite_persists(state: StateManager, tmp_path: Path) -> None:
    """Test favorites survive a reload from disk."""
    assert state.toggle_favorite(ONE) is True

    reloaded = StateManager(data_dir=str(tmp_path))

    assert reloaded.get_favorites() == [ONE]
    assert reloaded.is_favorite(Channel(title="Other name", url=ONE.url))


def test_toggle_favorite_twice(state: StateManager) -> None:
    state.toggle_favorite(ONE)

    assert state.toggle_favorite(ONE) is False
    assert state.get_favorites() == []


def test_set_and_clear_favorites(state: StateManager, tmp_path: Path) -> None:
    state.set_favorites([ONE, TWO])
    data = json.loads((tmp_path / "favorites.json").read_text())

    assert [item["url"] for item in data["favorites"]] == [ONE.url, TWO.url]

    state.clear_favorites()

    assert state.get_favorites() == []


def test_get_favorites_returns_copy(state: StateManager) -> None:
    state.set_favorites([ONE])

    state.get_favorites().append(TWO)

    assert state.get_favorites() == [ONE]


def test_favorites_change_callback(state: StateManager) -> None:
    calls = []
    state.on_favorites_change(lambda: calls.append(True))

    state.toggle_favorite(ONE)
    state.toggle_favorite(ONE)

    assert len(calls) == 2


def test_corrupt_files_fall_back_to_defaults(tmp_path: Path) -> None:
    """Test unreadable JSON is ignored instead of raising."""
    (tmp_path / "favorites.json").write_text("{not json")
    (tmp_path / "settings.json").write_text("[1, 2]")

    state = StateManager(data_dir=str(tmp_path))

    assert state.get_favorites() == []
    assert state.get_setting("theme") is None
    assert state.is_dark_mode()


def test_favorites_without_url_are_skipped(tmp_path: Path) -> None:
    (tmp_path / "favorites.json").write_text(
        json.dumps({"favorites": [{"title": "no url"}, ONE.to_dict(), "junk"]})
    )

    state = StateManager(data_dir=str(tmp_path))

    assert state.get_favorites() == [ONE]


def test_last_url(state: StateManager, tmp_path: Path) -> None:
    assert state.get_last_url() == ""

    state.set_last_url("http://example.com/list.m3u")

    assert StateManager(data_dir=str(tmp_path)).get_last_url() == "http://example.com/list.m3u"


def test_toggle_theme(state: StateManager, tmp_path: Path) -> None:
    calls = []
    state.on_theme_change(lambda: calls.append(True))

    assert state.is_dark_mode()
    assert state.toggle_theme() is False
    assert StateManager(data_dir=str(tmp_path)).get_setting("theme") == "light"
    assert state.toggle_theme() is True
    assert calls == [True, True]


def test_data_dir_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "env-data"
    monkeypatch.setenv("STREAMEO_DATA_DIR", str(target))

    state = StateManager()

    assert state.data_dir == target
    assert target.is_dir()


def test_failed_favorites_write_keeps_state(
    state: StateManager, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Test a failed save is logged, re-raised and leaves favorites untouched."""
    state.set_favorites([TWO])
    calls = []
    state.on_favorites_change(lambda: calls.append(True))
    # A directory in place of the file makes every write fail, even as root
    (tmp_path / "favorites.json").unlink()
    (tmp_path / "favorites.json").mkdir()

    with caplog.at_level(logging.ERROR, logger="streameo.services.state_manager"):
        with pytest.raises(OSError):
            state.toggle_favorite(ONE)

    assert state.get_favorites() == [TWO]
    assert not state.is_favorite(ONE)
    assert calls == []
    assert "Failed to save state file" in caplog.text


def test_failed_settings_write_keeps_state(state: StateManager, tmp_path: Path) -> None:
    (tmp_path / "settings.json").mkdir()

    with pytest.raises(OSError):
        state.set_last_url("http://example.com/list.m3u")
    with pytest.raises(OSError):
        state.toggle_theme()

    assert state.get_last_url() == ""
    assert state.is_dark_mode()
