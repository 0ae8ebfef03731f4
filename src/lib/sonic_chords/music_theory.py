"""
Pure music theory calculations - no I/O, no mutable state.

Notes are generated by walking the circle of fifths and tuned the
Pythagorean way: the Nth generated pitch has frequency 3**N, so two
consecutive fifths are two consecutive powers of three.
"""
import math
from dataclasses import dataclass

from .constants import Music, Naming, IndexStrategy, Defaults
from .errors import UnknownIdentifierError, PreconditionError, SpiralRangeError
from .logger import get_logger

logger = get_logger(__name__)


# Generation order for each naming scheme
NOTES_PRIMARY = {
    Naming.CLASSIC: ("C", "G", "D", "A", "E", "B", "F#"),
    Naming.COSMIC: ("A", "E", "B", "F", "C", "G", "D"),
}

NOTES_SECONDARY = {
    Naming.CLASSIC: ("C#", "G#", "D#", "A#", "F"),
    Naming.COSMIC: ("A#", "E#", "B#", "F#", "C#"),
}

# Second layer of the spiral, one Pythagorean comma above the first
NOTES_SPIRAL = {
    Naming.CLASSIC: ("Cx", "Gx", "Dx", "Ax", "Ex", "Bx"),
    Naming.COSMIC: ("Ax", "Ex", "Bx", "Fx", "Cx", "Gx"),
}

# Mode names, classical and cosmological, paired by position
MODES = ("Lydian", "Mixolydian", "Aeolian", "Locrian", "Ionian", "Dorian", "Phrygian")
MODE_ALIASES = ("Lunar", "Mercurial", "Venusian", "Solar", "Martial", "Jovial", "Saturnine")

# Starting offset of each mode along the circle of fifths (brightest = 0)
MODE_OFFSETS = (0, -2, -4, -6, -1, -3, -5)

SCALE_DEGREES = (
    "Tonic",
    "Supertonic",
    "Mediant",
    "Subdominant",
    "Dominant",
    "Submediant",
    "Subtonic",
)

ROMAN_NUMERALS = ("I", "II", "III", "IV", "V", "VI", "VII")


@dataclass(frozen=True)
class NoteFrequency:
    """A generated pitch name with its Pythagorean frequency."""
    note: str
    frequency: int
    index: int  # generation index along the circle of fifths


@dataclass(frozen=True)
class ScaleNote:
    """A note placed at one degree of a generated scale."""
    note: str
    frequency: int
    degree: int
    degree_name: str
    numeral: str


@dataclass(frozen=True)
class ModeDefinition:
    """One of the seven modes as a run of seven fifths."""
    name: str
    alias: str
    offset: int
    pattern: tuple

    def display_name(self, naming=Defaults.NAMING):
        """Return the mode name used by a naming scheme."""
        return self.alias if naming == Naming.COSMIC else self.name


def _build_note_table(naming):
    generated = NOTES_PRIMARY[naming] + NOTES_SECONDARY[naming] + NOTES_SPIRAL[naming]
    table = [
        NoteFrequency(note, Music.FIFTH_RATIO ** index, index)
        for index, note in enumerate(generated)
    ]
    # Wraparound copy of the chromatic names; negative mode offsets land here
    table.extend(table[:Music.NOTES_PER_OCTAVE])
    return tuple(table)


NOTE_TABLES = {naming: _build_note_table(naming) for naming in Naming.ALL}

# O(1) lookups. Copies share their source's index, so first occurrence wins.
FREQUENCY_MAPS = {
    naming: {entry.note: entry.frequency for entry in table}
    for naming, table in NOTE_TABLES.items()
}
NOTE_INDEX_MAPS = {
    naming: {entry.note: entry.index for entry in table}
    for naming, table in NOTE_TABLES.items()
}

MODE_DEFINITIONS = tuple(
    ModeDefinition(name, alias, offset, tuple(offset + step for step in range(Music.SCALE_DEGREES)))
    for name, alias, offset in zip(MODES, MODE_ALIASES, MODE_OFFSETS)
)

_MODE_LOOKUP = {}
for _definition in MODE_DEFINITIONS:
    _MODE_LOOKUP[_definition.name] = _definition
    _MODE_LOOKUP[_definition.alias] = _definition

# Seven consecutive fifths folded into one octave, in pitch order.
# Position of fifth `step` is step * 7 semitones, mod 12.
SONIC_ORDER = tuple(
    sorted(
        range(Music.SCALE_DEGREES),
        key=lambda step: (step * Music.SEMITONES_PER_FIFTH) % Music.NOTES_PER_OCTAVE,
    )
)
SONIC_PATTERN = tuple(
    (step * Music.SEMITONES_PER_FIFTH) % Music.NOTES_PER_OCTAVE for step in SONIC_ORDER
)  # (0, 2, 4, 6, 7, 9, 11)

logger.debug(
    "Note tables built: %d slots per scheme, %d modes",
    len(NOTE_TABLES[Naming.CLASSIC]),
    len(MODE_DEFINITIONS),
)


def _check_naming(naming):
    if naming not in NOTE_TABLES:
        raise UnknownIdentifierError(f"Naming scheme {naming!r} not found")


def get_note_table(naming=Defaults.NAMING):
    """Return the full wraparound note table for a naming scheme."""
    _check_naming(naming)
    return NOTE_TABLES[naming]


def get_note_names(naming=Defaults.NAMING):
    """Return the 12 chromatic note names in generation order."""
    _check_naming(naming)
    return list(NOTES_PRIMARY[naming] + NOTES_SECONDARY[naming])


def get_mode_names(naming=Defaults.NAMING):
    """Return list of available mode names."""
    _check_naming(naming)
    return [definition.display_name(naming) for definition in MODE_DEFINITIONS]


def get_mode(mode):
    """
    Look up a mode by classical name or alias.

    Raises:
        UnknownIdentifierError: if the mode is not known
    """
    definition = _MODE_LOOKUP.get(mode)
    if definition is None:
        raise UnknownIdentifierError(f"Mode {mode!r} not found")
    return definition


def get_frequency(note, naming=Defaults.NAMING):
    """Return the Pythagorean frequency of a note, or None if unknown."""
    _check_naming(naming)
    return FREQUENCY_MAPS[naming].get(note)


def get_note_index(note, naming=Defaults.NAMING):
    """Return the generation index of a note, or None if unknown."""
    _check_naming(naming)
    return NOTE_INDEX_MAPS[naming].get(note)


def resolve_index(index, size, strategy=Defaults.STRATEGY):
    """
    Map a raw root + offset index into the note table.

    Args:
        index: root index plus mode offset, may be negative
        size: length of the note table
        strategy: one of IndexStrategy.ALL

    Returns:
        A valid table index
    """
    if strategy == IndexStrategy.SPIRAL:
        return index % size
    if strategy == IndexStrategy.CHROMATIC:
        return index % Music.NOTES_PER_OCTAVE
    if strategy == IndexStrategy.LINEAR:
        if not 0 <= index < size:
            raise SpiralRangeError(f"Index {index} outside spiral range 0..{size - 1}")
        return index
    raise UnknownIdentifierError(f"Index strategy {strategy!r} not found")


def get_scale(root, mode, sorted=False, naming=Defaults.NAMING, strategy=Defaults.STRATEGY):
    """
    Generate the 7-note scale for a root and mode.

    The seven fifths of the mode are laid out in pitch order, so the
    semitone gaps between consecutive notes are always 2,2,2,1,2,2,1.
    Degrees are numbered from the requested root, which is always the
    Tonic (I) even when it does not sit in the first slot.

    Args:
        root: note name in the chosen naming scheme (e.g. "C")
        mode: mode name or alias (e.g. "Lydian" or "Lunar")
        sorted: order notes alphabetically, rotated so the root leads
        naming: Naming.CLASSIC or Naming.COSMIC
        strategy: how out-of-range indices wrap, see IndexStrategy

    Returns:
        List of 7 ScaleNote

    Raises:
        UnknownIdentifierError: unknown root, mode, naming or strategy
        SpiralRangeError: linear strategy ran off the note table
    """
    table = get_note_table(naming)

    root_index = NOTE_INDEX_MAPS[naming].get(root)
    if root_index is None:
        raise UnknownIdentifierError(f"Root note {root!r} not found")

    definition = get_mode(mode)

    generated = [
        table[resolve_index(root_index + offset, len(table), strategy)]
        for offset in definition.pattern
    ]

    # The root is the fifth at step -offset of the pattern
    root_slot = SONIC_ORDER.index(-definition.offset)

    scale = []
    for slot, step in enumerate(SONIC_ORDER):
        entry = generated[step]
        degree = (slot - root_slot) % Music.SCALE_DEGREES
        scale.append(
            ScaleNote(
                note=entry.note,
                frequency=entry.frequency,
                degree=degree,
                degree_name=SCALE_DEGREES[degree],
                numeral=ROMAN_NUMERALS[degree],
            )
        )

    if sorted:
        scale.sort(key=lambda note: note.note)
        tonic_position = next(i for i, note in enumerate(scale) if note.degree == 0)
        scale = scale[tonic_position:] + scale[:tonic_position]

    return scale


def reduce_to_octave(value, target):
    """
    Fold a frequency by octaves until it lies within an octave of target.

    Args:
        value: frequency to fold, finite and > 0
        target: reference frequency, finite and > 0

    Returns:
        The octave-equivalent of value closest to target

    Raises:
        PreconditionError: if either argument is not finite and positive
    """
    if not (math.isfinite(value) and math.isfinite(target)) or value <= 0 or target <= 0:
        raise PreconditionError("Frequencies must be finite and positive")

    reduced = value
    while reduced >= target * 2:
        reduced /= 2
    while reduced < target / 2:
        reduced *= 2

    if abs(reduced / 2 - target) < abs(reduced - target):
        return reduced / 2
    return reduced
