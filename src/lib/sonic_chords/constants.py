"""
Constants for the sonic_chords engine.
All magic strings and numbers are defined here for easy maintenance.
"""
from dataclasses import dataclass


# ============================================================================
# MUSIC CONSTANTS
# ============================================================================
class Music:
    """Music theory constants."""
    NOTES_PER_OCTAVE = 12
    SCALE_DEGREES = 7

    # Semitones covered by one perfect fifth
    SEMITONES_PER_FIFTH = 7

    # Pythagorean generator: each fifth is 3x the previous frequency
    FIFTH_RATIO = 3

    # Chord sizes covered by the template catalogue
    MIN_CHORD_SIZE = 2
    MAX_CHORD_SIZE = 7


# ============================================================================
# NAMING SCHEMES
# ============================================================================
class Naming:
    """Note/mode naming scheme constants."""
    CLASSIC = "classic"
    COSMIC = "cosmic"

    ALL = [CLASSIC, COSMIC]


# ============================================================================
# INDEX STRATEGIES
# ============================================================================
class IndexStrategy:
    """How a root + mode offset is mapped into the generated note table."""
    SPIRAL = "spiral"        # wrap modulo the full table (default)
    CHROMATIC = "chromatic"  # wrap modulo 12
    LINEAR = "linear"        # no wrap, out of range is an error

    ALL = [SPIRAL, CHROMATIC, LINEAR]


# ============================================================================
# SETTINGS KEYS
# ============================================================================
class Settings:
    """Keys used when persisting the user's selection."""
    USE_NEW_NAMING = "useNewNaming"
    SELECTED_NOTE_INDEX = "selectedNoteIndex"
    SELECTED_MODE_INDEX = "selectedModeIndex"


# ============================================================================
# DEFAULTS
# ============================================================================
class Defaults:
    """Default selection values."""
    NAMING = Naming.CLASSIC
    STRATEGY = IndexStrategy.SPIRAL
    NOTE_INDEX = 0
    MODE_INDEX = 0
    HIDE_INVERSIONS = True


# ============================================================================
# LOGGING
# ============================================================================
@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    enable_console: bool = True
    enable_file: bool = False
    file_path: str = "sonic_chords.log"
