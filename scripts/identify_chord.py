#!/usr/bin/env python3
"""
scripts/identify_chord.py — name the chord formed by a set of notes.

Notes may be MIDI numbers or note names with an octave (C4, Eb3, F#5).
With --file, every vertical sonority of a score (MIDI, ABC, MusicXML) is
labelled after music21 chordifies it.

Usage:
    python scripts/identify_chord.py 60 64 67
    python scripts/identify_chord.py E4 G4 C5 --grid
    python scripts/identify_chord.py C3 G3 Bb3 D4 E4 --top 3
    python scripts/identify_chord.py --file tune.abc
"""
import argparse
import os
import sys
import warnings

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

warnings.filterwarnings("ignore")

import music21
from music21.exceptions21 import Music21Exception

from keychord.constants import MAX_ALTERNATIVES, ROOT_NAMES
from keychord.naming import format_match, interval_grid, pcs_to_notes
from keychord.recognition import reduce_to_pitch_class_set, recognize


def parse_note(token) -> int:
    """'60' → 60, 'C4' → 60, 'Bb3' → 58. Names without an octave sit in octave 4."""
    text = token.strip()
    if text.lstrip("-").isdigit():
        return int(text)
    # ABC/music21 spell flats with '-'; accept the usual 'b' as well
    if len(text) > 1 and text[1] == "b":
        text = text[0] + "-" + text[2:]
    return int(music21.pitch.Pitch(text).midi)


def parse_notes(tokens) -> list[int]:
    return [parse_note(t) for t in tokens]


def describe(notes, top=MAX_ALTERNATIVES, grid=False) -> list[str]:
    """Console report for one set of notes: best match, optional degree grid, alternatives."""
    matches = recognize(notes)
    if not matches:
        return ["No matching chords"]

    best = matches[0]
    fm = format_match(best, notes)
    lines = [f"{fm.display_name}  ({fm.long_name})"]
    detail = fm.inversion or ""
    if fm.bass_name:
        detail += f" • bass {fm.bass_name}"
    if detail:
        lines.append(f"   {detail.strip(' •')}")

    if grid:
        lines.append(f"   {'Degree':<7}{'Semis':>5}  {'Note':<5}Present")
        for row in interval_grid(best):
            mark = "✓" if row.present else ""
            lines.append(f"   {row.degree:<7}{row.semitones:>5}  {row.note:<5}{mark}")

    alternatives = matches[1:top + 1]
    if alternatives:
        lines.append("── Alternative interpretations ─────────────────────────────")
        for m in alternatives:
            alt = format_match(m, notes)
            subset = " subset" if m.is_subset else ""
            lines.append(f"   {alt.display_name:<14}{m.matched_count}/{m.chord_size}{subset}")
    return lines


def label_score(score):
    """Yield (offset, midi_notes, display_name) for each chordified sonority of a music21 score."""
    for c in score.chordify().flatten().getElementsByClass(music21.chord.Chord):
        notes = sorted(int(p.midi) for p in c.pitches)
        if not notes:
            continue
        matches = recognize(notes)
        name = format_match(matches[0], notes).display_name if matches else "N.C."
        yield float(c.offset), notes, name


def _print_score_labels(path):
    try:
        score = music21.converter.parse(path)
    except (Music21Exception, OSError) as e:
        print(f"Error parsing {path}: {e}")
        return 1

    print(f"\n── Chords in {os.path.basename(path)} " + "─" * 40)
    print(f"   {'Offset':>7}  {'Chord':<14}Notes")
    count = 0
    for offset, notes, name in label_score(score):
        pcs = sorted(reduce_to_pitch_class_set(notes))
        print(f"   {offset:>7.2f}  {name:<14}{pcs_to_notes(pcs)}")
        count += 1
    print("─" * 60)
    print(f"Labelled {count} sonorities.")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Identify the chord formed by a set of notes.")
    parser.add_argument("notes", nargs="*", help="MIDI numbers or note names (e.g. 60 64 67, C4 E4 G4)")
    parser.add_argument("--top", type=int, default=MAX_ALTERNATIVES,
                        help=f"How many alternative interpretations to list (default {MAX_ALTERNATIVES})")
    parser.add_argument("--grid", action="store_true", help="Show the interval-degree grid of the best match")
    parser.add_argument("--file", type=str, default=None, help="Label every chord in a MIDI/ABC/MusicXML file")
    args = parser.parse_args(argv)

    if args.file:
        return _print_score_labels(args.file)

    if not args.notes:
        parser.error("give some notes or --file")

    try:
        notes = parse_notes(args.notes)
    except (Music21Exception, ValueError) as e:
        parser.error(f"could not read note: {e}")

    names = " ".join(f"{ROOT_NAMES[n % 12]}({n})" for n in notes)
    print(f"Notes: {names}")
    for line in describe(notes, top=args.top, grid=args.grid):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
