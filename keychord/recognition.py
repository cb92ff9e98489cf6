"""
Chord recognition: pressed notes → ranked list of candidate chord matches.

    recognize([60, 64, 67])[0]   # Match(root=0, type_key='major', ...)

Single pitch classes and perfect fifths/fourths are answered directly from the
notes; everything else is scored against the template bank and sorted by
match_sort_key.
"""
import collections

from keychord.constants import ROOT_NAMES
from keychord.templates import get_bank, pcs_to_vector
from keychord.vocabulary import CHORD_PRIORITY, priority_index

SINGLE = "single"
FIFTH = "fifth"

# Types missing from CHORD_PRIORITY rank after every listed type.
_UNRANKED = len(CHORD_PRIORITY)

_MATCH_FIELDS = [
    "root", "type_key", "matched_count", "chord_size", "is_subset", "exact_match",
    "matched_pcs", "missing_pcs", "extra_pcs", "chord_pcs",
]


class Match(collections.namedtuple("Match", _MATCH_FIELDS)):
    """
    One candidate chord for the pressed set.

    matched_pcs / extra_pcs are ascending; missing_pcs / chord_pcs follow the
    chord formula order (root first).
    """
    __slots__ = ()

    @property
    def root_name(self) -> str:
        return ROOT_NAMES[self.root]

    @property
    def type_index(self) -> int:
        idx = priority_index(self.type_key)
        return -1 if idx is None else idx


def to_pitch_class(note) -> int:
    """Octave-reduce a note number. Negative numbers wrap instead of failing."""
    return int(note) % 12


def reduce_to_pitch_class_set(notes) -> set[int]:
    return {to_pitch_class(n) for n in notes}


def match_sort_key(match):
    """exact first, more matched tones, vocabulary priority, smaller chord, lower root."""
    idx = priority_index(match.type_key)
    return (
        not match.exact_match,
        -match.matched_count,
        _UNRANKED if idx is None else idx,
        match.chord_size,
        match.root,
    )


def rank_matches(matches) -> list[Match]:
    return sorted(matches, key=match_sort_key)


def _single_match(pc) -> Match:
    return Match(
        root=pc, type_key=SINGLE, matched_count=1, chord_size=1,
        is_subset=True, exact_match=True,
        matched_pcs=(pc,), missing_pcs=(), extra_pcs=(), chord_pcs=(pc,),
    )


def _fifth_match(root, other) -> Match:
    return Match(
        root=root, type_key=FIFTH, matched_count=2, chord_size=2,
        is_subset=True, exact_match=True,
        matched_pcs=tuple(sorted((root, other))), missing_pcs=(), extra_pcs=(),
        chord_pcs=(root, other),
    )


def _match_dyad(notes):
    """
    Power-chord rules for exactly two pitch classes.

    Which pitch class is lower is decided by the lowest note actually sounding
    for each class, so C3+G4 and G3+C5 are told apart. Returns None when the
    interval is not a perfect fifth or fourth.
    """
    lowest = {}
    for n in notes:
        pc = to_pitch_class(n)
        if pc not in lowest or n < lowest[pc]:
            lowest[pc] = n

    lower_pc, higher_pc = sorted(lowest, key=lowest.get)
    interval = (higher_pc - lower_pc) % 12

    if interval == 0:
        return _single_match(lower_pc)
    if interval == 7:
        return _fifth_match(lower_pc, higher_pc)
    if interval == 5:
        # a fourth is a fifth heard from above: the upper note is the root
        return _fifth_match(higher_pc, lower_pc)
    return None


def _match_templates(pressed_pcs) -> list[Match]:
    bank = get_bank()
    if not bank.templates:
        return []

    counts = bank.matrix @ pcs_to_vector(pressed_pcs)
    pressed_size = len(pressed_pcs)

    matches = []
    for i in counts.nonzero()[0]:
        t = bank.templates[i]
        matched = int(counts[i])
        extra = tuple(sorted(pressed_pcs - t.pcs))
        matches.append(Match(
            root=t.root,
            type_key=t.type_key,
            matched_count=matched,
            chord_size=t.size,
            is_subset=not extra,
            exact_match=matched == pressed_size,
            matched_pcs=tuple(sorted(pressed_pcs & t.pcs)),
            missing_pcs=tuple(pc for pc in t.ordered_pcs if pc not in pressed_pcs),
            extra_pcs=extra,
            chord_pcs=t.ordered_pcs,
        ))
    return matches


def recognize(pressed_notes) -> list[Match]:
    """
    Rank every chord interpretation of the currently sounding notes.

    Args:
        pressed_notes: any iterable of note numbers (list, set, generator, None).

    Returns:
        list[Match], best first. Empty when nothing is pressed or no template
        shares a pitch class with the input.
    """
    if pressed_notes is None:
        return []
    notes = list(pressed_notes)
    if not notes:
        return []

    pressed_pcs = reduce_to_pitch_class_set(notes)

    if len(pressed_pcs) == 1:
        return [_single_match(next(iter(pressed_pcs)))]

    if len(pressed_pcs) == 2:
        dyad = _match_dyad(notes)
        if dyad is not None:
            return [dyad]

    return rank_matches(_match_templates(pressed_pcs))
