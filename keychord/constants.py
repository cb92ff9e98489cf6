# ── Pitch-class lookup tables ─────────────────────────────────────────────────

# Sharp-preferred spelling, index = pitch class.
ROOT_NAMES: list[str] = [
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"
]
ROOTS = ROOT_NAMES

# Semitones above the root → scale-degree label shown in the interval grid.
INTERVAL_NAMES: dict[int, str] = {
    0:  "1",
    1:  "♭2",
    2:  "2",
    3:  "♭3",
    4:  "3",
    5:  "4",
    6:  "♭5",
    7:  "5",
    8:  "#5",
    9:  "6",
    10: "♭7",
    11: "7",
}

# ── Practice-mode defaults ────────────────────────────────────────────────────

DEFAULT_ROOTS = frozenset({0, 2, 4, 5, 7, 9, 11})   # naturals only
DEFAULT_CATEGORIES = frozenset({"major", "minor", "diminished", "augmented", "suspended"})
DEFAULT_HOLD_SECONDS = 2.0

# 88-key piano range; voicings are anchored around middle C.
LOWEST_MIDI, HIGHEST_MIDI = 21, 108
TARGET_ROOT_MIDI = 60

# Alternative interpretations listed after the top match.
MAX_ALTERNATIVES = 5
