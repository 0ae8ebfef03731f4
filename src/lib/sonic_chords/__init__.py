"""
Sonic Chords - Pythagorean scale generation and chord enumeration.
"""

from .music_theory import (
    NOTE_TABLES,
    MODES,
    MODE_ALIASES,
    MODE_DEFINITIONS,
    SCALE_DEGREES,
    ROMAN_NUMERALS,
    SONIC_PATTERN,
    NoteFrequency,
    ScaleNote,
    ModeDefinition,
    get_note_names,
    get_mode_names,
    get_mode,
    get_frequency,
    get_scale,
    reduce_to_octave,
)
from .chord_engine import (
    CHORD_TEMPLATES,
    GAPS,
    QUALITY_ORDER,
    QUALITY_SYMBOLS,
    Chord,
    ChordEngine,
    ChordTables,
    ChordTemplate,
    build_tables,
    build_chord,
    semitones_from,
    resolve_quality,
    get_dyads,
    get_triads,
    get_tetrachords,
    get_pentachords,
    get_hexachords,
    get_heptachords,
    get_all_chords,
    get_chord_count,
)
from .errors import (
    SonicChordsError,
    UnknownIdentifierError,
    MalformedScaleError,
    QualityResolutionError,
    PreconditionError,
    SpiralRangeError,
)
from .settings import SettingsStore, MemorySettings
from .selection import Selection, Event
from .logger import setup_logging

__all__ = [
    # Music Theory
    "NOTE_TABLES",
    "MODES",
    "MODE_ALIASES",
    "MODE_DEFINITIONS",
    "SCALE_DEGREES",
    "ROMAN_NUMERALS",
    "SONIC_PATTERN",
    "NoteFrequency",
    "ScaleNote",
    "ModeDefinition",
    "get_note_names",
    "get_mode_names",
    "get_mode",
    "get_frequency",
    "get_scale",
    "reduce_to_octave",
    # Chord Engine
    "CHORD_TEMPLATES",
    "GAPS",
    "QUALITY_ORDER",
    "QUALITY_SYMBOLS",
    "Chord",
    "ChordEngine",
    "ChordTables",
    "ChordTemplate",
    "build_tables",
    "build_chord",
    "semitones_from",
    "resolve_quality",
    "get_dyads",
    "get_triads",
    "get_tetrachords",
    "get_pentachords",
    "get_hexachords",
    "get_heptachords",
    "get_all_chords",
    "get_chord_count",
    # Errors
    "SonicChordsError",
    "UnknownIdentifierError",
    "MalformedScaleError",
    "QualityResolutionError",
    "PreconditionError",
    "SpiralRangeError",
    # Selection
    "SettingsStore",
    "MemorySettings",
    "Selection",
    "Event",
    # Logging
    "setup_logging",
]
