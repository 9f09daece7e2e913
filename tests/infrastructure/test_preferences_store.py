import json
import logging
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

import arch_graph_sync.infrastructure.storage as storage_module
from arch_graph_sync.infrastructure import (
    JsonFileStorage,
    MemoryStorage,
    PreferencesStore,
)
from arch_graph_sync.infrastructure.preferences_store import MAX_RECORD_BYTES
from arch_graph_sync.schemas import LayoutPreferences, PaneState, PaneStates
from tests.factories import FailingStorage

KEY = "arch-graph-layout-state"


@pytest.fixture
def mock_storage_dir():
    """Point the default file storage at a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        tmp_path = Path(tmpdir) / "prefs"
        with patch.object(storage_module, "STORAGE_DIR", tmp_path):
            yield tmp_path


def record(**overrides) -> str:
    data = {
        "dividerPosition": 0.45,
        "paneStates": {"primary": "maximized", "secondary": "minimized"},
        "timestamp": 1700000000000,
    }
    data.update(overrides)
    return json.dumps(data)


def test_missing_record_returns_default(store: PreferencesStore):
    prefs = store.load()
    assert prefs == LayoutPreferences.default(0.6)
    assert prefs.pane_states == PaneStates.normal()
    assert prefs.timestamp == 0


def test_save_then_load(store: PreferencesStore, storage: MemoryStorage):
    prefs = LayoutPreferences(
        divider_position=0.3,
        pane_states=PaneStates(
            primary=PaneState.NORMAL, secondary=PaneState.MINIMIZED
        ),
        timestamp=1700000000123,
    )
    assert store.save(prefs) is True

    written = json.loads(storage.items[KEY])
    assert written == {
        "dividerPosition": 0.3,
        "paneStates": {"primary": "normal", "secondary": "minimized"},
        "timestamp": 1700000000123,
    }
    assert store.load() == prefs


def test_valid_record_is_loaded(store: PreferencesStore, storage: MemoryStorage):
    storage.set_item(KEY, record())
    prefs = store.load()
    assert prefs.divider_position == 0.45
    assert prefs.pane_states.primary is PaneState.MAXIMIZED
    assert prefs.pane_states.secondary is PaneState.MINIMIZED


def test_unknown_fields_are_ignored(store: PreferencesStore, storage: MemoryStorage):
    storage.set_item(KEY, record(theme="dark", version=3))
    assert store.load().divider_position == 0.45


@pytest.mark.parametrize(
    "raw",
    [
        "not json at all",
        "",
        "[]",
        "null",
        '{"dividerPosition": 0.5',
        record(dividerPosition="0.5"),
        record(dividerPosition=None),
        record(dividerPosition=True),
        record(timestamp="yesterday"),
        record(timestamp=-1),
        record(paneStates={"primary": "hidden", "secondary": "normal"}),
        record(paneStates={"primary": "minimized", "secondary": "minimized"}),
        record(paneStates={"primary": "normal"}),
        json.dumps({"dividerPosition": 0.5, "timestamp": 1}),
        json.dumps({"paneStates": {"primary": "normal", "secondary": "normal"}}),
    ],
)
def test_invalid_record_falls_back_to_default(
    store: PreferencesStore, storage: MemoryStorage, raw: str, caplog
):
    storage.set_item(KEY, raw)
    with caplog.at_level(logging.WARNING):
        prefs = store.load()
    assert prefs == store.default()
    assert "invalid layout record" in caplog.text


def test_oversized_record_is_ignored(store: PreferencesStore, storage: MemoryStorage):
    storage.set_item(KEY, record(padding="x" * MAX_RECORD_BYTES))
    assert store.load() == store.default()


def test_oversized_record_warning_reports_bytes(
    store: PreferencesStore, storage: MemoryStorage, caplog
):
    # Two bytes per character in UTF-8: over the byte limit, under it in chars.
    padding = "\u00e9" * (MAX_RECORD_BYTES // 2 + 1)
    raw = json.dumps({"dividerPosition": 0.5, "padding": padding}, ensure_ascii=False)
    assert len(raw) < MAX_RECORD_BYTES
    storage.set_item(KEY, raw)

    with caplog.at_level(logging.WARNING):
        assert store.load() == store.default()
    assert f"is {len(raw.encode('utf-8'))} bytes" in caplog.text


def test_failing_storage_never_raises(caplog):
    store = PreferencesStore(FailingStorage(), key=KEY)
    with caplog.at_level(logging.WARNING):
        assert store.load() == store.default()
        assert store.save(LayoutPreferences.default()) is False
        assert store.clear() is False
    assert "quota exceeded" in caplog.text


def test_clear_forgets_record(store: PreferencesStore, storage: MemoryStorage):
    store.save(LayoutPreferences.default(0.7))
    assert store.clear() is True
    assert KEY not in storage.items
    assert store.load().divider_position == 0.6


def test_custom_default_divider():
    store = PreferencesStore(MemoryStorage(), key=KEY, default_divider_position=0.4)
    assert store.load().divider_position == 0.4


def test_json_file_storage(tmp_path: Path):
    storage = JsonFileStorage(tmp_path / "nested" / "dir")
    assert storage.get_item(KEY) is None

    storage.set_item(KEY, record())
    assert (tmp_path / "nested" / "dir" / f"{KEY}.json").exists()
    assert storage.get_item(KEY) == record()

    storage.remove_item(KEY)
    storage.remove_item(KEY)
    assert storage.get_item(KEY) is None


def test_json_file_storage_default_dir(mock_storage_dir: Path):
    store = PreferencesStore(JsonFileStorage(), key=KEY)
    store.save(LayoutPreferences.default(0.35))

    assert (mock_storage_dir / f"{KEY}.json").exists()
    assert PreferencesStore(JsonFileStorage(), key=KEY).load().divider_position == 0.35
