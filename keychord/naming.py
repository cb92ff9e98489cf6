"""
Turn a Match into display text: chord symbol, inversion wording, bass note,
long description and the degree grid shown under the top match.
"""
import collections

from keychord.constants import INTERVAL_NAMES, ROOT_NAMES
from keychord.recognition import FIFTH, SINGLE, to_pitch_class
from keychord.vocabulary import CHORD_FORMULAS, TYPE_LONG_NAMES, TYPE_SUFFIXES

FormattedMatch = collections.namedtuple(
    "FormattedMatch", ["display_name", "inversion", "bass_name", "long_name"]
)

GridRow = collections.namedtuple("GridRow", ["degree", "semitones", "note", "present"])

ROOT_POSITION = "root position"
NO_CHORD_TONE_IN_BASS = "no chord tone in bass"
SLASH_BASS = "slash bass"

# Chords with more tones than a seventh are named with a slash bass.
_MAX_INVERSION_SIZE = 4

_ORDINALS = {1: "1st", 2: "2nd", 3: "3rd"}


def interval_name(semitones) -> str:
    """Scale-degree label for a semitone offset above the root (mod 12)."""
    return INTERVAL_NAMES[int(semitones) % 12]


def long_name_for(type_key) -> str:
    return TYPE_LONG_NAMES.get(type_key, type_key)


def suffix_for(type_key) -> str:
    return TYPE_SUFFIXES.get(type_key, type_key)


def display_name_for(root, type_key) -> str:
    """Chord symbol without any bass, e.g. (0, 'm7') -> 'Cm⁷'."""
    return ROOT_NAMES[root] + suffix_for(type_key)


def pcs_to_notes(pcs) -> str:
    return " ".join(ROOT_NAMES[pc] for pc in pcs)


def inversion_label(index) -> str:
    """Position of the bass in the formula: -1 none, 0 root, N the Nth inversion."""
    if index < 0:
        return NO_CHORD_TONE_IN_BASS
    if index == 0:
        return ROOT_POSITION
    return f"{_ORDINALS.get(index, f'{index}th')} inversion"


def _ordered_tones(root, type_key):
    return [(root + i) % 12 for i in CHORD_FORMULAS.get(type_key, [])]


def format_match(match, sounding_notes=None) -> FormattedMatch:
    """
    Name a match using the notes actually sounding.

    The bass is the lowest sounding note, so this needs the raw note numbers
    rather than pitch classes. Without notes, inversion and bass stay None.
    """
    root_name = ROOT_NAMES[match.root]
    if match.type_key == SINGLE:
        return FormattedMatch(root_name, None, None, "Single Note")

    display_name = display_name_for(match.root, match.type_key)
    long_name = long_name_for(match.type_key)

    notes = list(sounding_notes) if sounding_notes is not None else []
    if not notes:
        return FormattedMatch(display_name, None, None, long_name)

    bass_pc = to_pitch_class(min(notes))
    bass_name = ROOT_NAMES[bass_pc]

    if match.chord_size > _MAX_INVERSION_SIZE:
        inversion = SLASH_BASS
        display_name = f"{display_name}/{bass_name}"
    else:
        tones = _ordered_tones(match.root, match.type_key)
        idx = tones.index(bass_pc) if bass_pc in tones else -1
        inversion = inversion_label(idx)
        if match.type_key == FIFTH and match.chord_size == 2 and bass_pc != match.root:
            # fourth read as an inverted fifth keeps its real bottom note
            display_name = f"{display_name}/{bass_name}"

    return FormattedMatch(display_name, inversion, bass_name, long_name)


def interval_grid(match) -> list[GridRow]:
    """One row per chord tone: degree label, semitones above root, note name, pressed or not."""
    rows = []
    pressed = set(match.matched_pcs)
    for pc in match.chord_pcs:
        semitones = (pc - match.root) % 12
        rows.append(GridRow(interval_name(semitones), semitones, ROOT_NAMES[pc], pc in pressed))
    return rows
