"""
Chord generation engine - pure business logic.

Builds every chord possible within a 7-note scale laid out on
SONIC_PATTERN. Qualities and interval names for every (template, root
degree) pair are computed once when the tables are built; building a
chord afterwards is only array lookups.

Template families:
    Int_       dyads: Int2 Int3 Int5 Int6 Int7
    Sus_       suspended triads: Sus2 Sus4, pentad Sus5
    Shell3     root + third + seventh
    Quartal_   stacked fourths: Quartal3-6
    Cluster_   adjacent degrees: Cluster3-6
    Spread_    open spread voicings: Spread4-6
    Add_       added-note tetrads: Add9 Add11 Add13
    HeptQrt13/HeptQnt13  full-scale quartal/quintal voicings
"""
import math
from dataclasses import dataclass, replace
from numbers import Real
from typing import Optional

from .constants import Music, Defaults
from .errors import (
    MalformedScaleError,
    PreconditionError,
    QualityResolutionError,
    UnknownIdentifierError,
)
from .logger import get_logger
from .music_theory import SONIC_PATTERN, ScaleNote

logger = get_logger(__name__)


INTERVAL_NAMES = {
    0: "P1",
    1: "m2",
    2: "M2",
    3: "m3",
    4: "M3",
    5: "P4",
    6: "TT-",
    7: "P5",
    8: "m6",
    9: "M6",
    10: "m7",
    11: "M7",
}

# Symbol suffix appended to the root note name
QUALITY_SYMBOLS = {
    "Int5": "5", "Int3": "3", "Int2": "2", "Int6": "6", "Int7": "7",
    "Major": "", "Minor": "m", "Diminished": "dim",
    "Sus2": "sus2", "Sus4": "sus4",
    "Shell3": "sh", "Quartal3": "qrt", "Cluster3": "cls",
    "Major7": "maj7", "Dominant7": "7", "Minor7": "m7", "HalfDiminished7": "ø7",
    "Add9": "add9", "Add11": "add11", "Add13": "add13",
    "Quartal4": "qrt4", "Spread4": "sp4", "Cluster4": "cls4",
    "Major9": "maj9", "Minor9": "m9",
    "Sus5": "sus5", "Quartal5": "qrt5", "Spread5": "sp5", "Cluster5": "cls5",
    "Major11": "maj11", "Minor11": "m11",
    "Quartal6": "qrt6", "Spread6": "sp6", "Cluster6": "cls6",
    "Major13": "maj13", "Minor13": "m13",
    "HeptQrt13": "hqrt", "HeptQnt13": "hqnt",
}

# Display order: by size, tertian before non-tertian within a size
QUALITY_ORDER = (
    # Dyads
    "Int2", "Int3", "Int5", "Int6", "Int7",
    # Triads
    "Major", "Minor", "Diminished",
    "Sus2", "Sus4",
    "Shell3", "Quartal3", "Cluster3",
    # Tetrads
    "Major7", "Dominant7", "Minor7", "HalfDiminished7",
    "Add9", "Add11", "Add13",
    "Quartal4", "Spread4", "Cluster4",
    # Pentads
    "Major9", "Minor9",
    "Sus5", "Quartal5", "Spread5", "Cluster5",
    # Hexads
    "Major11", "Minor11",
    "Quartal6", "Spread6", "Cluster6",
    # Heptads
    "Major13", "Minor13",
    "HeptQrt13", "HeptQnt13",
)

QUALITY_RANK = {quality: rank for rank, quality in enumerate(QUALITY_ORDER)}


@dataclass(frozen=True)
class ChordTemplate:
    """A chord shape as scale-degree offsets from its root."""
    quality: str
    degrees: tuple

    @property
    def size(self):
        return len(self.degrees)


@dataclass(frozen=True)
class LookupEntry:
    """Resolved quality and interval names for one template at one root."""
    quality: str
    intervals: tuple


@dataclass(frozen=True)
class Chord:
    """A concrete chord built on one root of one scale."""
    root: ScaleNote
    quality: str
    symbol: str
    notes: tuple
    degrees: tuple
    intervals: tuple
    inversion_of: Optional[str] = None

    @property
    def note_names(self):
        return tuple(note.note for note in self.notes)

    @property
    def key(self):
        """Order-independent identity of the chord's pitch set."""
        return ",".join(sorted(self.note_names))


CHORD_TEMPLATES = (
    # 2-note
    ChordTemplate("Int5", (0, 4)),
    ChordTemplate("Int3", (0, 2)),
    ChordTemplate("Int2", (0, 1)),
    ChordTemplate("Int6", (0, 5)),
    ChordTemplate("Int7", (0, 6)),
    # 3-note
    ChordTemplate("Major", (0, 2, 4)),
    ChordTemplate("Sus2", (0, 1, 4)),
    ChordTemplate("Sus4", (0, 3, 4)),
    ChordTemplate("Shell3", (0, 2, 6)),
    ChordTemplate("Quartal3", (0, 3, 6)),
    ChordTemplate("Cluster3", (0, 1, 2)),
    # 4-note
    ChordTemplate("Major7", (0, 2, 4, 6)),
    ChordTemplate("Add9", (0, 1, 2, 4)),
    ChordTemplate("Add11", (0, 2, 3, 4)),
    ChordTemplate("Add13", (0, 2, 4, 5)),
    ChordTemplate("Quartal4", (0, 2, 3, 6)),
    ChordTemplate("Spread4", (0, 2, 5, 6)),
    ChordTemplate("Cluster4", (0, 1, 2, 3)),
    # 5-note
    ChordTemplate("Major9", (0, 1, 2, 4, 6)),
    ChordTemplate("Sus5", (0, 1, 2, 4, 5)),
    ChordTemplate("Quartal5", (0, 3, 6, 2, 5)),
    ChordTemplate("Spread5", (0, 2, 3, 5, 6)),
    ChordTemplate("Cluster5", (0, 1, 2, 3, 4)),
    # 6-note
    ChordTemplate("Major11", (0, 1, 2, 3, 4, 6)),
    ChordTemplate("Quartal6", (0, 1, 2, 3, 5, 6)),
    ChordTemplate("Spread6", (0, 1, 3, 4, 5, 6)),
    ChordTemplate("Cluster6", (0, 1, 2, 3, 4, 5)),
    # 7-note
    ChordTemplate("Major13", (0, 1, 2, 3, 4, 5, 6)),
    ChordTemplate("HeptQrt13", (0, 3, 6, 2, 5, 1, 4)),
    ChordTemplate("HeptQnt13", (0, 4, 1, 5, 2, 6, 3)),
)


def derive_gaps(pattern=SONIC_PATTERN):
    """
    Semitone steps between consecutive scale degrees, wrapping the octave.

    (0, 2, 4, 6, 7, 9, 11) -> (2, 2, 2, 1, 2, 2, 1)
    """
    gaps = [pattern[i] - pattern[i - 1] for i in range(1, len(pattern))]
    gaps.append(Music.NOTES_PER_OCTAVE - pattern[-1] + pattern[0])
    return tuple(gaps)


GAPS = derive_gaps()


def semitones_from(degree, steps, gaps=GAPS):
    """Semitone distance from scale degree `degree` up `steps` degrees."""
    return sum(gaps[(degree + i) % len(gaps)] for i in range(steps))


def interval_name(semitones):
    return INTERVAL_NAMES.get(semitones, f"{semitones}st")


def resolve_quality(template_quality, semitones):
    """
    Resolve the concrete quality of a template from its intervals.

    Args:
        template_quality: quality tag of the template
        semitones: semitone distance of each chord member from the root

    Returns:
        The concrete quality name

    Raises:
        QualityResolutionError: for an interval combination with no quality
    """
    if template_quality == "Major":
        third, fifth = semitones[1], semitones[2]
        if third == 4 and fifth == 7:
            return "Major"
        if third == 3 and fifth == 7:
            return "Minor"
        if third == 3 and fifth == 6:
            return "Diminished"

    elif template_quality == "Major7":
        third, fifth, seventh = semitones[1], semitones[2], semitones[3]
        if third == 4 and fifth == 7 and seventh == 11:
            return "Major7"
        if third == 4 and fifth == 7 and seventh == 10:
            return "Dominant7"
        if third == 3 and fifth == 7 and seventh == 10:
            return "Minor7"
        if third == 3 and fifth == 6 and seventh == 10:
            return "HalfDiminished7"

    elif template_quality in ("Major9", "Major11", "Major13"):
        # The third is the member two scale steps up, chord index 2
        extension = template_quality[len("Major"):]
        if semitones[2] == 4:
            return "Major" + extension
        if semitones[2] == 3:
            return "Minor" + extension

    else:
        return template_quality

    raise QualityResolutionError(
        f"No {template_quality} family quality for intervals {list(semitones)}"
    )


@dataclass(frozen=True)
class ChordTables:
    """Immutable tables shared by every chord lookup."""
    pattern: tuple
    gaps: tuple
    templates: tuple
    lookup: tuple  # LookupEntry at template_index * 7 + root_degree
    indices_by_size: tuple  # template indices per chord size, sizes 0 and 1 empty

    def entry(self, template_index, root_degree):
        return self.lookup[template_index * Music.SCALE_DEGREES + root_degree]


def build_tables(pattern=SONIC_PATTERN, templates=CHORD_TEMPLATES):
    """
    Precompute quality and interval names for every template at every root.

    Args:
        pattern: the 7 semitone positions of the scale layout
        templates: the chord template catalogue

    Returns:
        ChordTables

    Raises:
        QualityResolutionError: if the pattern yields an unresolvable chord
    """
    gaps = derive_gaps(pattern)

    lookup = []
    for template in templates:
        for root_degree in range(Music.SCALE_DEGREES):
            semitones = [semitones_from(root_degree, step, gaps) for step in template.degrees]
            lookup.append(
                LookupEntry(
                    quality=resolve_quality(template.quality, semitones),
                    intervals=tuple(interval_name(s) for s in semitones),
                )
            )

    indices_by_size = tuple(
        tuple(i for i, template in enumerate(templates) if template.size == size)
        for size in range(Music.MAX_CHORD_SIZE + 1)
    )

    logger.debug(
        "Chord tables built: %d templates, %d lookup entries, gaps %s",
        len(templates),
        len(lookup),
        gaps,
    )
    return ChordTables(
        pattern=tuple(pattern),
        gaps=gaps,
        templates=tuple(templates),
        lookup=tuple(lookup),
        indices_by_size=indices_by_size,
    )


def validate_scale(scale, gaps=GAPS):
    """
    Check that a scale is 7 named Pythagorean notes laid out on the gap table.

    Each frequency must be a power of three. Its exponent places the note
    on the circle of fifths, and the pitch classes of consecutive notes,
    wrapping the octave, must step by exactly `gaps`. A tonic-first or
    alphabetical ordering of a mode other than Lydian therefore fails.

    Raises:
        MalformedScaleError: if the scale is not well formed
    """
    if scale is None or len(scale) != Music.SCALE_DEGREES:
        count = "no" if scale is None else len(scale)
        raise MalformedScaleError(f"Scale must have exactly 7 notes, got {count}")

    positions = []
    for position, note in enumerate(scale):
        name = getattr(note, "note", None)
        if not isinstance(name, str) or not name:
            raise MalformedScaleError(f"Note at position {position} has no name")
        frequency = getattr(note, "frequency", None)
        if (
            isinstance(frequency, bool)
            or not isinstance(frequency, Real)
            or not math.isfinite(frequency)
            or not frequency > 0
        ):
            raise MalformedScaleError(
                f"Note {name!r} at position {position} has invalid frequency {frequency!r}"
            )
        fifths = round(math.log(frequency, Music.FIFTH_RATIO))
        if not math.isclose(Music.FIFTH_RATIO ** fifths, frequency, rel_tol=1e-9):
            raise MalformedScaleError(
                f"Note {name!r} frequency {frequency!r} is not a power of {Music.FIFTH_RATIO}"
            )
        positions.append((fifths * Music.SEMITONES_PER_FIFTH) % Music.NOTES_PER_OCTAVE)

    steps = tuple(
        (positions[(i + 1) % len(positions)] - positions[i]) % Music.NOTES_PER_OCTAVE
        for i in range(len(positions))
    )
    if steps != tuple(gaps):
        raise MalformedScaleError(
            f"Scale steps {list(steps)} do not follow the layout {list(gaps)}"
        )


class ChordEngine:
    """
    Enumerates and classifies the chords of a 7-note scale.
    Holds only immutable tables, so one engine can serve any caller.
    """

    def __init__(self, tables=None):
        """
        Args:
            tables: ChordTables to use, defaults to the module tables
        """
        self._tables = tables if tables is not None else TABLES

    @property
    def tables(self):
        return self._tables

    def build_chord(self, scale, root_degree, template_index):
        """
        Build one chord by table lookup.

        Args:
            scale: 7 ScaleNote in slot order (as from get_scale)
            root_degree: slot index of the chord root, 0-6
            template_index: index into the template catalogue

        Returns:
            Chord
        """
        template = self._tables.templates[template_index]
        entry = self._tables.entry(template_index, root_degree)
        root = scale[root_degree]
        degrees = tuple((root_degree + offset) % Music.SCALE_DEGREES for offset in template.degrees)

        return Chord(
            root=root,
            quality=entry.quality,
            symbol=root.note + QUALITY_SYMBOLS[entry.quality],
            notes=tuple(scale[degree] for degree in degrees),
            degrees=degrees,
            intervals=entry.intervals,
        )

    def _build_group(self, scale, template_indices, hide_inversions):
        validate_scale(scale, self._tables.gaps)

        out = []
        primaries = {}
        for root_degree in range(Music.SCALE_DEGREES):
            for template_index in template_indices:
                chord = self.build_chord(scale, root_degree, template_index)
                primary = primaries.get(chord.key)
                if primary is None:
                    primaries[chord.key] = chord
                    out.append(chord)
                elif not hide_inversions:
                    out.append(
                        replace(
                            chord,
                            symbol=f"{chord.symbol} (inversion of {primary.symbol})",
                            inversion_of=primary.symbol,
                        )
                    )

        out.sort(key=lambda chord: QUALITY_RANK[chord.quality])
        return out

    def _by_size(self, scale, size, hide_inversions):
        return self._build_group(scale, self._tables.indices_by_size[size], hide_inversions)

    def get_dyads(self, scale, hide_inversions=Defaults.HIDE_INVERSIONS):
        """Return all 2-note chords of the scale."""
        return self._by_size(scale, 2, hide_inversions)

    def get_triads(self, scale, hide_inversions=Defaults.HIDE_INVERSIONS):
        """Return all 3-note chords of the scale."""
        return self._by_size(scale, 3, hide_inversions)

    def get_tetrachords(self, scale, hide_inversions=Defaults.HIDE_INVERSIONS):
        """Return all 4-note chords of the scale."""
        return self._by_size(scale, 4, hide_inversions)

    def get_pentachords(self, scale, hide_inversions=Defaults.HIDE_INVERSIONS):
        """Return all 5-note chords of the scale."""
        return self._by_size(scale, 5, hide_inversions)

    def get_hexachords(self, scale, hide_inversions=Defaults.HIDE_INVERSIONS):
        """Return all 6-note chords of the scale."""
        return self._by_size(scale, 6, hide_inversions)

    def get_heptachords(self, scale, hide_inversions=Defaults.HIDE_INVERSIONS):
        """Return all 7-note chords of the scale."""
        return self._by_size(scale, 7, hide_inversions)

    def get_all_chords(self, scale, hide_inversions=Defaults.HIDE_INVERSIONS):
        """Return the chords of every size, sorted by quality."""
        return self._build_group(scale, range(len(self._tables.templates)), hide_inversions)

    def get_chords_of_size(self, scale, size=None, hide_inversions=Defaults.HIDE_INVERSIONS):
        """Return chords of one size (2-7), or all chords when size is None."""
        if size is None:
            return self.get_all_chords(scale, hide_inversions)
        if not isinstance(size, int) or not Music.MIN_CHORD_SIZE <= size <= Music.MAX_CHORD_SIZE:
            raise PreconditionError(f"Chord size must be 2-7, got {size}")
        return self._by_size(scale, size, hide_inversions)

    def get_chord_count(self):
        """Total chords before inversion removal: templates x 7 roots."""
        return len(self._tables.templates) * Music.SCALE_DEGREES


TABLES = build_tables()

_default_engine = ChordEngine(TABLES)


def build_chord(scale, root_degree, template_index):
    return _default_engine.build_chord(scale, root_degree, template_index)


def get_dyads(scale, hide_inversions=Defaults.HIDE_INVERSIONS):
    return _default_engine.get_dyads(scale, hide_inversions)


def get_triads(scale, hide_inversions=Defaults.HIDE_INVERSIONS):
    return _default_engine.get_triads(scale, hide_inversions)


def get_tetrachords(scale, hide_inversions=Defaults.HIDE_INVERSIONS):
    return _default_engine.get_tetrachords(scale, hide_inversions)


def get_pentachords(scale, hide_inversions=Defaults.HIDE_INVERSIONS):
    return _default_engine.get_pentachords(scale, hide_inversions)


def get_hexachords(scale, hide_inversions=Defaults.HIDE_INVERSIONS):
    return _default_engine.get_hexachords(scale, hide_inversions)


def get_heptachords(scale, hide_inversions=Defaults.HIDE_INVERSIONS):
    return _default_engine.get_heptachords(scale, hide_inversions)


def get_all_chords(scale, hide_inversions=Defaults.HIDE_INVERSIONS):
    return _default_engine.get_all_chords(scale, hide_inversions)


def get_chord_count():
    return _default_engine.get_chord_count()


def template_index(quality):
    """Return the catalogue index of a template by its quality tag."""
    for index, template in enumerate(CHORD_TEMPLATES):
        if template.quality == quality:
            return index
    raise UnknownIdentifierError(f"No chord template {quality!r}")
