"""
Chord vocabulary: interval formulas, tie-break priority, display suffixes,
long names and the practice-mode category tags.

Formulas are semitone offsets from the root. Offsets above 11 are compound
intervals (a 9th is 14) and fold back into the octave when templates are built.
"""

CHORD_FORMULAS: dict[str, list[int]] = {
    # Basic / extended triads
    "fifth":  [0, 7],
    "major":  [0, 4, 7],
    "minor":  [0, 3, 7],
    "dim":    [0, 3, 6],
    "aug":    [0, 4, 8],
    "sus2":   [0, 2, 7],
    "sus4":   [0, 5, 7],
    "flat5":  [0, 4, 6],   # major third + diminished fifth, kept as defined
    "6":      [0, 4, 7, 9],
    "m6":     [0, 3, 7, 9],

    # Sevenths
    "7":      [0, 4, 7, 10],
    "m7":     [0, 3, 7, 10],
    "dim7":   [0, 3, 6, 9],
    "M7":     [0, 4, 7, 11],
    "mM7":    [0, 3, 7, 11],
    "7sus2":  [0, 2, 7, 10],
    "7sus4":  [0, 5, 7, 10],
    "7b5":    [0, 4, 6, 10],
    "7#5":    [0, 4, 8, 10],
    "m7b5":   [0, 3, 6, 10],
    "m7#5":   [0, 3, 8, 10],

    # Added tone
    "add9":   [0, 4, 7, 14],
    "madd9":  [0, 3, 7, 14],
    "add11":  [0, 4, 7, 17],
    "madd11": [0, 3, 7, 17],
    "add13":  [0, 4, 7, 21],
    "madd13": [0, 3, 7, 21],

    # Six-seven combinations
    "7/6":    [0, 4, 7, 9, 10],
    "9/6":    [0, 4, 7, 9, 14],
    "m9/6":   [0, 3, 7, 9, 14],

    # Ninths
    "9":      [0, 4, 7, 10, 14],
    "m9":     [0, 3, 7, 10, 14],
    "b9":     [0, 4, 7, 10, 13],
    "mb9":    [0, 3, 7, 10, 13],
    "9#5":    [0, 4, 8, 10, 14],
    "9sus4":  [0, 5, 7, 10, 14],
    "9b5":    [0, 4, 6, 10, 14],
    "m9b5":   [0, 3, 6, 10, 14],
    "m9#5":   [0, 3, 8, 10, 14],
    "M9":     [0, 4, 7, 11, 14],

    # Elevenths
    "11":     [0, 4, 7, 10, 14, 17],
    "m11":    [0, 3, 7, 10, 14, 17],
    "M11":    [0, 4, 7, 11, 14, 17],
    "11b5":   [0, 4, 6, 10, 14, 17],
    "11#5":   [0, 4, 8, 10, 14, 17],
    "11M7":   [0, 4, 7, 11, 14, 17],
    "11b9":   [0, 4, 7, 10, 13, 17],
    "11#9":   [0, 4, 7, 10, 15, 17],

    # Thirteenths
    "13":     [0, 4, 7, 10, 14, 17, 21],
    "M13":    [0, 4, 7, 11, 14, 17, 21],
    "m13":    [0, 3, 7, 10, 14, 17, 21],
    "13b5":   [0, 4, 6, 10, 14, 17, 21],
    "13#5":   [0, 4, 8, 10, 14, 17, 21],
}

# Tie-break order: triads, sevenths, added tones, six-seven, ninths, 11ths, 13ths.
CHORD_PRIORITY: list[str] = [
    "fifth", "major", "minor", "dim", "aug", "sus2", "sus4", "flat5", "6", "m6",
    "7", "m7", "dim7", "M7", "mM7", "7sus2", "7sus4", "7b5", "7#5", "m7b5", "m7#5",
    "add9", "madd9", "add11", "madd11", "add13", "madd13",
    "7/6", "9/6", "m9/6",
    "9", "m9", "b9", "mb9", "9#5", "9sus4", "9b5", "m9b5", "m9#5", "M9",
    "11", "m11", "M11", "11b5", "11#5", "11M7", "11b9", "11#9",
    "13", "M13", "m13", "13b5", "13#5",
]

_PRIORITY_INDEX: dict[str, int] = {t: i for i, t in enumerate(CHORD_PRIORITY)}


def priority_index(type_key):
    """Position of `type_key` in CHORD_PRIORITY, or None when it is not ranked."""
    return _PRIORITY_INDEX.get(type_key)


TYPE_SUFFIXES: dict[str, str] = {
    "fifth": "⁵",     "major": "",        "minor": "m",       "dim": "°",
    "aug": "⁺",       "sus2": "sus²",     "sus4": "sus⁴",     "flat5": "♭⁵",
    "6": "⁶",         "m6": "m⁶",
    "7": "⁷",         "m7": "m⁷",         "dim7": "°⁷",       "M7": "M⁷",
    "mM7": "mM⁷",     "7sus2": "⁷sus²",   "7sus4": "⁷sus⁴",   "7b5": "⁷♭⁵",
    "7#5": "⁷⁺⁵",     "m7b5": "m⁷♭⁵",     "m7#5": "m⁷⁺⁵",
    "add9": "add⁹",   "madd9": "madd⁹",   "add11": "add¹¹",   "madd11": "madd¹¹",
    "add13": "add¹³", "madd13": "madd¹³",
    "7/6": "⁷/⁶",     "9/6": "⁹/⁶",       "m9/6": "m⁹/⁶",
    "9": "⁹",         "m9": "m⁹",         "b9": "♭⁹",         "mb9": "m♭⁹",
    "9#5": "⁹⁺⁵",     "9sus4": "⁹sus⁴",   "9b5": "⁹♭⁵",       "m9b5": "m⁹♭⁵",
    "m9#5": "m⁹⁺⁵",   "M9": "M⁹",
    "11": "¹¹",       "m11": "m¹¹",       "M11": "M¹¹",       "11b5": "¹¹♭⁵",
    "11#5": "¹¹⁺⁵",   "11M7": "¹¹M⁷",     "11b9": "¹¹♭⁹",     "11#9": "¹¹⁺⁹",
    "13": "¹³",       "M13": "M¹³",       "m13": "m¹³",       "13b5": "¹³♭⁵",
    "13#5": "¹³⁺⁵",
}

TYPE_LONG_NAMES: dict[str, str] = {
    "fifth":  "Power Fifth",
    "major":  "Major",
    "minor":  "Minor",
    "dim":    "Diminished",
    "aug":    "Augmented",
    "sus2":   "Suspended 2nd",
    "sus4":   "Suspended 4th",
    "flat5":  "Flat Fifth",
    "6":      "Sixth",
    "m6":     "Minor Sixth",
    "7":      "Dominant Seventh",
    "m7":     "Minor Seventh",
    "dim7":   "Diminished Seventh",
    "M7":     "Major Seventh",
    "mM7":    "Minor Major Seventh",
    "7sus2":  "Seventh Suspended 2nd",
    "7sus4":  "Seventh Suspended 4th",
    "7b5":    "Seventh Flat Fifth",
    "7#5":    "Seventh Raised Fifth",
    "m7b5":   "Half-Diminished (Minor Seventh Flat Five)",
    "m7#5":   "Minor Seventh Raised Fifth",
    "add9":   "Added Ninth",
    "madd9":  "Minor Added Ninth",
    "add11":  "Added Eleventh",
    "madd11": "Minor Added Eleventh",
    "add13":  "Added Thirteenth",
    "madd13": "Minor Added Thirteenth",
    "7/6":    "Seven-Six Combination",
    "9/6":    "Nine-Six Combination",
    "m9/6":   "Minor Nine-Six Combination",
    "9":      "Ninth",
    "m9":     "Minor Ninth",
    "b9":     "Flat Ninth",
    "mb9":    "Minor Flat Ninth",
    "9#5":    "Ninth Raised Fifth",
    "9sus4":  "Ninth Suspended 4th",
    "9b5":    "Ninth Flat Fifth",
    "m9b5":   "Minor Ninth Flat Fifth",
    "m9#5":   "Minor Ninth Raised Fifth",
    "M9":     "Major Ninth",
    "11":     "Eleventh",
    "m11":    "Minor Eleventh",
    "M11":    "Major Eleventh",
    "11b5":   "Eleventh Flat Fifth",
    "11#5":   "Eleventh Raised Fifth",
    "11M7":   "Eleventh with Major Seventh",
    "11b9":   "Eleventh Flat Ninth",
    "11#9":   "Eleventh Raised Ninth",
    "13":     "Thirteenth",
    "M13":    "Major Thirteenth",
    "m13":    "Minor Thirteenth",
    "13b5":   "Thirteenth Flat Fifth",
    "13#5":   "Thirteenth Raised Fifth",
}

# ── Practice-mode filter groups ───────────────────────────────────────────────

CHORD_CATEGORIES: dict[str, dict] = {
    "major":      {"label": "Major",       "types": ["fifth", "major", "M7", "M9", "M11", "M13"]},
    "minor":      {"label": "Minor",       "types": ["minor", "m6", "m7", "m9", "m11", "m13"]},
    "diminished": {"label": "Diminished",  "types": ["dim", "dim7"]},
    "augmented":  {"label": "Augmented",   "types": ["aug", "9#5", "11#5", "13#5", "m9#5", "m7#5"]},
    "suspended":  {"label": "Suspended",   "types": ["sus2", "sus4", "7sus2", "7sus4", "9sus4"]},
    "flatRaised": {"label": "Flat/Raised", "types": ["flat5", "7b5", "9b5", "11b5", "13b5", "b9", "mb9", "m9b5"]},
    "sixth":      {"label": "6th",         "types": ["6", "m6", "7/6", "9/6", "m9/6"]},
    "seventh":    {"label": "7th",         "types": ["7", "m7", "dim7", "M7", "mM7", "7b5", "7#5",
                                                     "m7b5", "m7#5", "7sus2", "7sus4", "7/6"]},
    "add9":       {"label": "add9",        "types": ["add9", "madd9"]},
    "add11":      {"label": "add11",       "types": ["add11", "madd11"]},
    "add13":      {"label": "add13",       "types": ["add13", "madd13"]},
    "ninth":      {"label": "9th",         "types": ["9", "m9", "b9", "mb9", "9#5", "9sus4", "9b5",
                                                     "m9b5", "m9#5", "M9", "9/6", "m9/6"]},
    "eleventh":   {"label": "11th",        "types": ["11", "m11", "M11", "11b5", "11#5", "11M7",
                                                     "11b9", "11#9"]},
    "thirteenth": {"label": "13th",        "types": ["13", "M13", "m13", "13b5", "13#5"]},
}

# Every tag of a type must be enabled for the type to be offered.
TYPE_TAGS: dict[str, list[str]] = {
    "fifth":  [],
    "major":  ["major"],
    "minor":  ["minor"],
    "dim":    ["diminished"],
    "aug":    ["augmented"],
    "sus2":   ["suspended"],
    "sus4":   ["suspended"],
    "flat5":  ["flatRaised"],
    "6":      ["sixth"],
    "m6":     ["minor", "sixth"],

    "7":      ["seventh"],
    "m7":     ["minor", "seventh"],
    "dim7":   ["diminished", "seventh"],
    "M7":     ["major", "seventh"],
    "mM7":    ["minor", "seventh"],
    "7sus2":  ["seventh", "suspended"],
    "7sus4":  ["seventh", "suspended"],
    "7b5":    ["seventh", "flatRaised"],
    "7#5":    ["seventh", "augmented"],
    "m7b5":   ["minor", "seventh", "flatRaised"],
    "m7#5":   ["minor", "seventh", "augmented"],

    "add9":   ["add9", "major"],
    "madd9":  ["add9", "minor"],
    "add11":  ["add11", "major"],
    "madd11": ["add11", "minor"],
    "add13":  ["add13", "major"],
    "madd13": ["add13", "minor"],

    "7/6":    ["seventh", "sixth"],
    "9/6":    ["ninth", "sixth"],
    "m9/6":   ["ninth", "sixth", "minor"],

    "9":      ["ninth", "seventh"],
    "m9":     ["ninth", "seventh", "minor"],
    "b9":     ["ninth", "seventh", "flatRaised"],
    "mb9":    ["ninth", "seventh", "minor", "flatRaised"],
    "9#5":    ["ninth", "seventh", "augmented"],
    "9sus4":  ["ninth", "seventh", "suspended"],
    "9b5":    ["ninth", "seventh", "flatRaised"],
    "m9b5":   ["ninth", "seventh", "minor", "flatRaised"],
    "m9#5":   ["ninth", "seventh", "minor", "augmented"],
    "M9":     ["major", "ninth", "seventh"],

    "11":     ["eleventh"],
    "m11":    ["eleventh", "minor"],
    "M11":    ["eleventh", "major"],
    "11b5":   ["eleventh", "flatRaised"],
    "11#5":   ["eleventh", "augmented"],
    "11M7":   ["eleventh", "major", "seventh"],
    "11b9":   ["eleventh", "ninth", "flatRaised"],
    "11#9":   ["eleventh", "ninth", "augmented"],

    "13":     ["thirteenth"],
    "M13":    ["major", "thirteenth"],
    "m13":    ["minor", "thirteenth"],
    "13b5":   ["thirteenth", "flatRaised"],
    "13#5":   ["thirteenth", "augmented"],
}
