"""
"Play the chord" trainer: choose a target chord from the enabled categories and
roots, voice it on the keyboard, and decide when the player has held it long
enough to count.

A typical loop feeding it from HeldNotes:

    session = PracticeSession(rng=random.Random(7))
    held = HeldNotes(on_change=session.update)
    while running:
        session.tick()
        time.sleep(0.06)

HeldNotes only reports changes, so tick() has to be polled for a steady hold
to be scored.
"""
import collections
import random
import time

from keychord.constants import (
    DEFAULT_CATEGORIES, DEFAULT_HOLD_SECONDS, DEFAULT_ROOTS,
    HIGHEST_MIDI, LOWEST_MIDI, TARGET_ROOT_MIDI,
)
from keychord.recognition import reduce_to_pitch_class_set
from keychord.templates import get_templates
from keychord.vocabulary import CHORD_CATEGORIES, TYPE_TAGS

Voicing = collections.namedtuple("Voicing", ["notes", "inversion", "ordered_pcs"])

TargetCheck = collections.namedtuple(
    "TargetCheck", ["all_present", "no_extras", "solved", "missing", "extra"]
)

_PICK_ATTEMPTS = 8
_OCTAVE_SHIFTS = range(-6, 7)


# ── Target selection ──────────────────────────────────────────────────────────

def allowed_templates(categories=DEFAULT_CATEGORIES, roots=DEFAULT_ROOTS, templates=None):
    """
    Templates a player can be asked for.

    Tags are atomic: m7 needs both 'minor' and 'seventh' enabled. A type with
    no tags (the power fifth) is offered when an enabled category lists it.
    """
    if templates is None:
        templates = get_templates()
    enabled = set(categories)
    listed = {t for cat in enabled for t in CHORD_CATEGORIES.get(cat, {}).get("types", [])}

    pool = []
    for t in templates:
        if t.root not in roots:
            continue
        tags = TYPE_TAGS.get(t.type_key, [])
        if not tags:
            if t.type_key in listed:
                pool.append(t)
        elif all(tag in enabled for tag in tags):
            pool.append(t)
    return pool


def _same_chord(a, b):
    return a.type_key == b.type_key and a.root == b.root


def pick_different(pool, avoid=None, rng=random):
    """Random template from `pool`, not the same chord as `avoid` when the pool allows it."""
    if not pool:
        return None
    if avoid is None:
        return pool[rng.randrange(len(pool))]
    if len(pool) == 1:
        return pool[0]
    for _ in range(_PICK_ATTEMPTS):
        cand = pool[rng.randrange(len(pool))]
        if not _same_chord(cand, avoid):
            return cand
    for cand in pool:
        if not _same_chord(cand, avoid):
            return cand
    return pool[0]


# ── Voicing ───────────────────────────────────────────────────────────────────

def _closest_note(pc, target=TARGET_ROOT_MIDI):
    """Key with pitch class `pc` nearest `target`; the lower key wins a tie."""
    best, best_dist = None, None
    for m in range(LOWEST_MIDI, HIGHEST_MIDI + 1):
        if m % 12 != pc:
            continue
        d = abs(m - target)
        if best_dist is None or d < best_dist:
            best, best_dist = m, d
    return best


def random_inversion(template, rng=random) -> int:
    n = len(template.ordered_pcs)
    return rng.randrange(n) if n > 1 else 0


def target_voicing(template, inversion=0) -> Voicing:
    """
    Concrete keys for a template, bass first.

    The root-position chord is stacked upward from the root nearest middle C,
    rotated so the `inversion`-th tone is in the bass, then shifted by whole
    octaves to keep the bass near middle C and every key on the keyboard.
    """
    ordered = list(template.ordered_pcs)
    n = len(ordered)
    inversion = inversion % n if n else 0

    start = ordered.index(template.root) if template.root in ordered else 0
    seq = ordered[start:] + ordered[:start]

    prev = _closest_note(template.root)
    ascending = [prev]
    for pc in seq[1:]:
        cand = prev + (pc - prev % 12) % 12
        if cand <= prev:
            cand += 12
        while cand > HIGHEST_MIDI:
            cand -= 12
        while cand < LOWEST_MIDI:
            cand += 12
        ascending.append(cand)
        prev = cand

    notes = ascending[inversion:] + ascending[:inversion]
    pcs = seq[inversion:] + seq[:inversion]
    for i in range(1, n):
        while notes[i] <= notes[i - 1]:
            notes[i] += 12

    best_k, best_dist = None, None
    for k in _OCTAVE_SHIFTS:
        shifted = [v + 12 * k for v in notes]
        if min(shifted) < LOWEST_MIDI or max(shifted) > HIGHEST_MIDI:
            continue
        d = abs(shifted[0] - TARGET_ROOT_MIDI)
        if best_dist is None or d < best_dist:
            best_k, best_dist = k, d

    if best_k is not None:
        notes = [v + 12 * best_k for v in notes]
    else:
        while max(notes) > HIGHEST_MIDI:
            notes = [v - 12 for v in notes]
        while min(notes) < LOWEST_MIDI:
            notes = [v + 12 for v in notes]

    clamped = []
    for v in notes:
        while v > HIGHEST_MIDI:
            v -= 12
        while v < LOWEST_MIDI:
            v += 12
        clamped.append(v)

    return Voicing(tuple(clamped), inversion, tuple(pcs))


# ── Checking the player ───────────────────────────────────────────────────────

def check_target(pressed_notes, template) -> TargetCheck:
    pressed = reduce_to_pitch_class_set(pressed_notes or [])
    missing = tuple(pc for pc in template.ordered_pcs if pc not in pressed)
    extra = tuple(sorted(pressed - template.pcs))
    all_present = not missing
    no_extras = not extra
    return TargetCheck(all_present, no_extras, all_present and no_extras, missing, extra)


class HoldTimer:
    """Progress (0..1) of holding the right chord; drops to 0 as soon as it is released or wrong."""

    def __init__(self, hold_seconds=DEFAULT_HOLD_SECONDS, clock=time.monotonic):
        self.hold_seconds = hold_seconds
        self.clock = clock
        self._start = None
        self.progress = 0.0

    def reset(self):
        self._start = None
        self.progress = 0.0

    def update(self, solved) -> float:
        if not solved:
            self.reset()
            return self.progress
        now = self.clock()
        if self._start is None:
            self._start = now
        if self.hold_seconds <= 0:
            self.progress = 1.0
        else:
            self.progress = min(1.0, (now - self._start) / self.hold_seconds)
        return self.progress

    @property
    def completed(self) -> bool:
        return self.progress >= 1.0


def solve_time_ms(started, finished, hold_seconds) -> float:
    """Time to find the chord, not counting the hold itself."""
    return max(0.0, (finished - started - hold_seconds) * 1000.0)


# ── Statistics ────────────────────────────────────────────────────────────────

def _empty_entry():
    return {"attempts": 0, "correct": 0, "total_time_ms": 0.0}


class PracticeStats:
    """Attempts / correct answers / solve time, aggregated by type, root and chord."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.by_type = {}
        self.by_root = {}
        self.by_chord = {}

    def record_round(self, template, correct, time_ms=0.0):
        if template is None:
            return
        chord_key = f"{template.type_key}@{template.root}"
        if chord_key not in self.by_chord:
            self.by_chord[chord_key] = dict(_empty_entry(), type_key=template.type_key, root=template.root)
        entries = [
            self.by_type.setdefault(template.type_key, _empty_entry()),
            self.by_root.setdefault(template.root, _empty_entry()),
            self.by_chord[chord_key],
        ]
        for entry in entries:
            entry["attempts"] += 1
            if correct:
                entry["correct"] += 1
                entry["total_time_ms"] += time_ms or 0.0

    @staticmethod
    def accuracy(entry) -> float:
        return entry["correct"] / entry["attempts"] if entry["attempts"] else 0.0

    @staticmethod
    def average_time_ms(entry):
        return entry["total_time_ms"] / entry["correct"] if entry["correct"] else None

    def to_dict(self) -> dict:
        return {
            "by_type": {k: dict(v) for k, v in self.by_type.items()},
            "by_root": {k: dict(v) for k, v in self.by_root.items()},
            "by_chord": {k: dict(v) for k, v in self.by_chord.items()},
        }


# ── Session ───────────────────────────────────────────────────────────────────

class PracticeSession:
    """
    One practice run. Call update() with the held notes after every change and
    poll tick() in between so the hold timer keeps running.

    When the target has been held for `hold_seconds` the round is scored and
    the next target is chosen once every key is released.
    """

    def __init__(self, categories=DEFAULT_CATEGORIES, roots=DEFAULT_ROOTS,
                 hold_seconds=DEFAULT_HOLD_SECONDS, allow_inversions=False,
                 rng=None, clock=time.monotonic, stats=None):
        self.pool = allowed_templates(categories, roots)
        self.allow_inversions = allow_inversions
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock
        self.timer = HoldTimer(hold_seconds, clock)
        self.stats = stats if stats is not None else PracticeStats()
        self.score = 0
        self.current = None
        self.voicing = None
        self.solved = False
        self.had_wrong = False
        self.started_at = None
        self._pressed = ()
        self.next_target()

    def next_target(self):
        self.current = pick_different(self.pool, self.current, self.rng)
        if self.current is None:
            self.voicing = None
        else:
            inv = random_inversion(self.current, self.rng) if self.allow_inversions else 0
            self.voicing = target_voicing(self.current, inv)
        self.solved = False
        self.had_wrong = False
        self.started_at = self.clock()
        self.timer.reset()
        return self.current

    def update(self, pressed_notes):
        """Returns the TargetCheck for the current target, or None when no chord is allowed."""
        notes = list(pressed_notes or [])
        self._pressed = tuple(notes)
        if self.solved and not notes:
            self.next_target()
        if self.current is None:
            return None

        check = check_target(notes, self.current)
        if self.solved:
            return check

        if check.extra:
            self.had_wrong = True
        self.timer.update(check.solved)
        if self.timer.completed:
            elapsed = solve_time_ms(self.started_at, self.clock(), self.timer.hold_seconds)
            self.stats.record_round(self.current, not self.had_wrong, elapsed)
            self.score += 1
            self.solved = True
        return check

    def tick(self):
        """Re-check the last pressed notes against the clock."""
        return self.update(self._pressed)
