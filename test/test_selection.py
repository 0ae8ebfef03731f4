"""
Unit tests for the selection state and its settings persistence.
"""
import pytest

from mock_settings import MockSettingsStore
from sonic_chords.constants import Naming, Settings
from sonic_chords.errors import UnknownIdentifierError
from sonic_chords.selection import Event, Selection
from sonic_chords.settings import MemorySettings, SettingsStore


class TestSettingsStore:
    """Tests for the settings interface."""

    def test_protocol_is_abstract(self):
        store = SettingsStore()
        with pytest.raises(NotImplementedError):
            store.get("key")
        with pytest.raises(NotImplementedError):
            store.set("key", "value")

    def test_memory_settings(self):
        store = MemorySettings({"a": "1"})
        assert store.get("a") == "1"
        assert store.get("b") is None
        assert store.get("b", "x") == "x"
        store.set("b", 2)
        assert store.get("b") == "2"
        assert store.as_dict() == {"a": "1", "b": "2"}


class TestSelection:
    """Tests for selection state management."""

    def test_defaults(self):
        selection = Selection()
        assert selection.naming == Naming.CLASSIC
        assert selection.root_name == "C"
        assert selection.mode_name == "Lydian"

    def test_loads_from_store(self):
        store = MockSettingsStore({
            Settings.USE_NEW_NAMING: "true",
            Settings.SELECTED_NOTE_INDEX: "4",
            Settings.SELECTED_MODE_INDEX: "4",
        })
        selection = Selection(store)
        assert selection.naming == Naming.COSMIC
        assert selection.root_name == "C"
        assert selection.mode_name == "Martial"
        assert Settings.SELECTED_NOTE_INDEX in store.reads

    def test_bad_stored_values_fall_back(self):
        store = MemorySettings({
            Settings.USE_NEW_NAMING: "yes",
            Settings.SELECTED_NOTE_INDEX: "seven",
            Settings.SELECTED_MODE_INDEX: "13",
        })
        selection = Selection(store)
        assert selection.naming == Naming.CLASSIC
        assert selection.root_index == 0
        assert selection.mode_index == 6
        assert selection.mode_name == "Phrygian"

    def test_set_root_persists_and_emits(self):
        store = MockSettingsStore()
        selection = Selection(store)
        received_events = []
        selection.subscribe(Event.ROOT_CHANGED, received_events.append)

        selection.set_root(1)

        assert selection.root_name == "G"
        assert store.writes == [(Settings.SELECTED_NOTE_INDEX, "1")]
        assert received_events == [{"index": 1, "name": "G"}]

    def test_cycle_root_wraps(self):
        selection = Selection()
        selection.cycle_root(-1)
        assert selection.root_index == 11
        assert selection.root_name == "F"
        selection.cycle_root(2)
        assert selection.root_name == "G"

    def test_cycle_mode(self):
        selection = Selection()
        modes = []
        selection.subscribe(Event.MODE_CHANGED, lambda data: modes.append(data["name"]))
        for _ in range(7):
            selection.cycle_mode(1)
        assert modes == [
            "Mixolydian", "Aeolian", "Locrian", "Ionian", "Dorian", "Phrygian", "Lydian",
        ]

    def test_toggle_naming(self):
        store = MockSettingsStore()
        selection = Selection(store)
        events = []
        selection.subscribe(Event.NAMING_CHANGED, events.append)

        selection.toggle_naming()
        assert selection.naming == Naming.COSMIC
        assert selection.root_name == "A"
        assert selection.mode_name == "Lunar"
        assert store.writes[-1] == (Settings.USE_NEW_NAMING, "true")
        assert events[0]["naming"] == Naming.COSMIC

        selection.toggle_naming()
        assert selection.naming == Naming.CLASSIC
        assert store.writes[-1] == (Settings.USE_NEW_NAMING, "false")

    def test_unknown_naming(self):
        selection = Selection()
        with pytest.raises(UnknownIdentifierError):
            selection.set_naming("solfege")

    def test_unsubscribe(self):
        selection = Selection()
        received = []
        selection.subscribe(Event.ROOT_CHANGED, received.append)
        selection.unsubscribe(Event.ROOT_CHANGED, received.append)
        selection.unsubscribe(Event.MODE_CHANGED, received.append)
        selection.set_root(3)
        assert received == []

    def test_unknown_event(self):
        selection = Selection()
        with pytest.raises(UnknownIdentifierError):
            selection.subscribe("tempo_changed", print)
        with pytest.raises(UnknownIdentifierError):
            selection.unsubscribe("tempo_changed", print)
        with pytest.raises(UnknownIdentifierError):
            selection.emit("tempo_changed")

    def test_unsubscribe_during_emit(self):
        selection = Selection()
        calls = []

        def once(data):
            calls.append("once")
            selection.unsubscribe(Event.MODE_CHANGED, once)

        selection.subscribe(Event.MODE_CHANGED, once)
        selection.subscribe(Event.MODE_CHANGED, lambda data: calls.append(data["name"]))
        selection.set_mode(1)
        selection.set_mode(2)
        assert calls == ["once", "Mixolydian", "Aeolian"]

    def test_scale_follows_selection(self):
        selection = Selection()
        assert [note.note for note in selection.get_scale()] == [
            "C", "D", "E", "F#", "G", "A", "B",
        ]
        selection.set_mode(4)  # Ionian
        assert [note.note for note in selection.get_scale(sorted=True)] == [
            "C", "D", "E", "F", "G", "A", "B",
        ]

    def test_chords(self):
        selection = Selection()
        assert len(selection.get_chords(size=3)) == 28
        assert len(selection.get_chords()) == 113
        assert len(selection.get_chords(hide_inversions=False)) == 210

    def test_display_data(self):
        selection = Selection()
        data = selection.get_display_data()
        assert data["root"] == "C"
        assert data["mode"] == "Lydian"
        assert data["naming"] == Naming.CLASSIC
        assert data["scale"] == ["C", "D", "E", "F#", "G", "A", "B"]
        assert data["chord_count"] == 210
