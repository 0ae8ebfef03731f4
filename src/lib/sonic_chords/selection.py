"""
Selection state - the user's root, mode and naming scheme.
Persists through a SettingsStore and notifies subscribers of changes.
"""
from .chord_engine import ChordEngine
from .constants import Defaults, Music, Naming, Settings
from .errors import UnknownIdentifierError
from .logger import get_logger
from .music_theory import MODE_DEFINITIONS, get_note_names, get_scale
from .settings import MemorySettings

logger = get_logger(__name__)


class Event:
    """Event type constants for selection changes."""

    ROOT_CHANGED = "root_changed"
    MODE_CHANGED = "mode_changed"
    NAMING_CHANGED = "naming_changed"

    ALL = (ROOT_CHANGED, MODE_CHANGED, NAMING_CHANGED)


class Selection:
    """
    Centralized selection container.
    Holds indices only; scales and chords are computed on demand.
    """

    def __init__(self, store=None, engine=None):
        """
        Args:
            store: SettingsStore to load from and save to
            engine: ChordEngine used by get_chords()
        """
        self.store = store if store is not None else MemorySettings()
        self.chord_engine = engine if engine is not None else ChordEngine()

        use_new = self.store.get(Settings.USE_NEW_NAMING)
        self.naming = Naming.COSMIC if use_new == "true" else Naming.CLASSIC
        self.root_index = self._load_index(
            Settings.SELECTED_NOTE_INDEX, Defaults.NOTE_INDEX, Music.NOTES_PER_OCTAVE
        )
        self.mode_index = self._load_index(
            Settings.SELECTED_MODE_INDEX, Defaults.MODE_INDEX, len(MODE_DEFINITIONS)
        )

        # Callbacks per event, replaced rather than mutated so emit sees a snapshot
        self._subscribers = {event_type: () for event_type in Event.ALL}

    def _load_index(self, key, default, count):
        raw = self.store.get(key)
        if raw is None:
            return default
        try:
            return int(raw) % count
        except (TypeError, ValueError):
            logger.debug("Ignoring unparsable setting %s=%r", key, raw)
            return default

    @property
    def root_name(self):
        return get_note_names(self.naming)[self.root_index]

    @property
    def mode_name(self):
        return MODE_DEFINITIONS[self.mode_index].display_name(self.naming)

    def _callbacks(self, event_type):
        if event_type not in Event.ALL:
            raise UnknownIdentifierError(f"Event {event_type!r} not found")
        return self._subscribers[event_type]

    def subscribe(self, event_type, callback):
        """
        Register a callback for selection changes.

        Args:
            event_type: one of Event.ALL
            callback: called with the change data dict

        Raises:
            UnknownIdentifierError: for an event type not in Event.ALL
        """
        self._subscribers[event_type] = self._callbacks(event_type) + (callback,)

    def unsubscribe(self, event_type, callback):
        """Remove a callback; unknown callbacks are ignored."""
        callbacks = self._callbacks(event_type)
        self._subscribers[event_type] = tuple(c for c in callbacks if c != callback)

    def emit(self, event_type, data=None):
        """Call every subscriber of an event, in subscription order."""
        for callback in self._callbacks(event_type):
            callback(data)

    def set_root(self, index):
        """Select a root by its position in the 12 generated names."""
        self.root_index = index % Music.NOTES_PER_OCTAVE
        self.store.set(Settings.SELECTED_NOTE_INDEX, str(self.root_index))
        logger.debug("Root set to %s (%d)", self.root_name, self.root_index)
        self.emit(Event.ROOT_CHANGED, {"index": self.root_index, "name": self.root_name})

    def cycle_root(self, delta):
        """Step the root through the generated names."""
        self.set_root(self.root_index + delta)

    def set_mode(self, index):
        """Select a mode by its position in MODE_DEFINITIONS."""
        self.mode_index = index % len(MODE_DEFINITIONS)
        self.store.set(Settings.SELECTED_MODE_INDEX, str(self.mode_index))
        logger.debug("Mode set to %s (%d)", self.mode_name, self.mode_index)
        self.emit(Event.MODE_CHANGED, {"index": self.mode_index, "name": self.mode_name})

    def cycle_mode(self, delta):
        """Step through the modes."""
        self.set_mode(self.mode_index + delta)

    def set_naming(self, naming):
        """
        Switch naming scheme. Indices are kept, so the same pitch slot
        is selected under its name in the new scheme.
        """
        if naming not in Naming.ALL:
            raise UnknownIdentifierError(f"Naming scheme {naming!r} not found")
        self.naming = naming
        self.store.set(Settings.USE_NEW_NAMING, "true" if naming == Naming.COSMIC else "false")
        logger.debug("Naming set to %s", naming)
        self.emit(
            Event.NAMING_CHANGED,
            {"naming": naming, "root": self.root_name, "mode": self.mode_name},
        )

    def toggle_naming(self):
        """Toggle between the classic and cosmic naming schemes."""
        current_idx = Naming.ALL.index(self.naming)
        self.set_naming(Naming.ALL[(current_idx + 1) % len(Naming.ALL)])

    def get_scale(self, sorted=False):
        """Return the scale for the current selection."""
        return get_scale(self.root_name, self.mode_name, sorted=sorted, naming=self.naming)

    def get_chords(self, size=None, hide_inversions=Defaults.HIDE_INVERSIONS):
        """
        Return the chords of the current scale.

        Args:
            size: chord size 2-7, or None for every size
            hide_inversions: drop chords that repeat an earlier pitch set
        """
        return self.chord_engine.get_chords_of_size(self.get_scale(), size, hide_inversions)

    def get_display_data(self):
        """
        Get data needed for rendering the selection.

        Returns:
            Dict with display information
        """
        return {
            "root": self.root_name,
            "mode": self.mode_name,
            "naming": self.naming,
            "scale": [note.note for note in self.get_scale()],
            "chord_count": self.chord_engine.get_chord_count(),
        }
