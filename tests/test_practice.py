import random
import unittest
from unittest.mock import MagicMock
from keychord.constants import DEFAULT_ROOTS, HIGHEST_MIDI, LOWEST_MIDI
from keychord.held_notes import HeldNotes
from keychord.practice import (
    HoldTimer,
    PracticeSession,
    PracticeStats,
    Voicing,
    allowed_templates,
    check_target,
    pick_different,
    random_inversion,
    solve_time_ms,
    target_voicing,
)
from keychord.templates import Template, get_templates, regen_templates


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def _template(root, type_key):
    return next(t for t in get_templates() if t.root == root and t.type_key == type_key)


class TestAllowedTemplates(unittest.TestCase):
    def setUp(self):
        regen_templates()

    def test_defaults(self):
        pool = allowed_templates()
        self.assertEqual(len(pool), 7 * 7)
        self.assertEqual({t.root for t in pool}, set(DEFAULT_ROOTS))
        self.assertEqual({t.type_key for t in pool},
                         {"fifth", "major", "minor", "dim", "aug", "sus2", "sus4"})

    def test_tags_are_atomic(self):
        pool = allowed_templates({"minor", "seventh"}, range(12))
        self.assertEqual({t.type_key for t in pool}, {"minor", "7", "m7", "mM7"})

    def test_untagged_type_needs_listing(self):
        types = {t.type_key for t in allowed_templates({"minor"}, range(12))}
        self.assertNotIn("fifth", types)
        types = {t.type_key for t in allowed_templates({"major"}, range(12))}
        self.assertIn("fifth", types)

    def test_empty_filters(self):
        self.assertEqual(allowed_templates(set(), range(12)), [])
        self.assertEqual(allowed_templates({"major"}, set()), [])


class TestPickDifferent(unittest.TestCase):
    def test_empty_pool(self):
        self.assertIsNone(pick_different([]))

    def test_single_element_pool(self):
        t = _template(0, "major")
        self.assertIs(pick_different([t], avoid=t), t)

    def test_avoids_current(self):
        rng = random.Random(0)
        pool = allowed_templates()
        avoid = pool[0]
        for _ in range(50):
            cand = pick_different(pool, avoid, rng)
            self.assertFalse(cand.type_key == avoid.type_key and cand.root == avoid.root)

    def test_falls_back_to_scan(self):
        rng = MagicMock()
        rng.randrange.return_value = 0
        c, g = _template(0, "major"), _template(7, "major")
        self.assertIs(pick_different([c, g], avoid=c, rng=rng), g)
        self.assertEqual(rng.randrange.call_count, 8)

    def test_no_alternative(self):
        c = _template(0, "major")
        self.assertIs(pick_different([c, c], avoid=c, rng=random.Random(1)), c)


class TestTargetVoicing(unittest.TestCase):
    def test_c_major_inversions(self):
        c = _template(0, "major")
        self.assertEqual(target_voicing(c), Voicing((60, 64, 67), 0, (0, 4, 7)))
        self.assertEqual(target_voicing(c, 1), Voicing((64, 67, 72), 1, (4, 7, 0)))
        self.assertEqual(target_voicing(c, 2), Voicing((55, 60, 64), 2, (7, 0, 4)))

    def test_inversion_wraps(self):
        c = _template(0, "major")
        self.assertEqual(target_voicing(c, 3), target_voicing(c, 0))

    def test_root_anchored_near_middle_c(self):
        self.assertEqual(target_voicing(_template(7, "major")).notes, (55, 59, 62))
        # F# is equally far above and below; the lower key wins
        self.assertEqual(target_voicing(_template(6, "major")).notes, (54, 58, 61))

    def test_all_voicings_playable(self):
        for t in get_templates():
            for inv in range(t.size):
                v = target_voicing(t, inv)
                self.assertEqual(len(v.notes), t.size)
                self.assertEqual(list(v.notes), sorted(set(v.notes)))
                self.assertTrue(LOWEST_MIDI <= min(v.notes) and max(v.notes) <= HIGHEST_MIDI)
                self.assertEqual(tuple(n % 12 for n in v.notes), v.ordered_pcs)
                self.assertEqual(check_target(v.notes, t).solved, True)

    def test_random_inversion(self):
        rng = MagicMock()
        rng.randrange.return_value = 2
        self.assertEqual(random_inversion(_template(0, "7"), rng), 2)
        rng.randrange.assert_called_with(4)
        lone = Template(0, "unison", frozenset({0}), 1, (0,))
        self.assertEqual(random_inversion(lone, rng), 0)


class TestCheckTarget(unittest.TestCase):
    def setUp(self):
        self.c = _template(0, "major")

    def test_solved(self):
        check = check_target([60, 64, 67], self.c)
        self.assertTrue(check.solved)
        self.assertEqual(check.missing, ())
        self.assertEqual(check.extra, ())

    def test_octaves_count(self):
        self.assertTrue(check_target([48, 64, 79], self.c).solved)

    def test_missing(self):
        check = check_target([60, 64], self.c)
        self.assertFalse(check.all_present)
        self.assertTrue(check.no_extras)
        self.assertFalse(check.solved)
        self.assertEqual(check.missing, (7,))

    def test_extra(self):
        check = check_target([60, 64, 67, 70], self.c)
        self.assertTrue(check.all_present)
        self.assertFalse(check.no_extras)
        self.assertEqual(check.extra, (10,))

    def test_nothing_pressed(self):
        check = check_target([], self.c)
        self.assertEqual(check.missing, (0, 4, 7))
        self.assertFalse(check.solved)


class TestHoldTimer(unittest.TestCase):
    def test_progress(self):
        clock = FakeClock()
        timer = HoldTimer(2.0, clock)
        self.assertEqual(timer.update(True), 0.0)
        clock.now = 1.0
        self.assertAlmostEqual(timer.update(True), 0.5)
        self.assertFalse(timer.completed)
        clock.now = 2.5
        self.assertEqual(timer.update(True), 1.0)
        self.assertTrue(timer.completed)

    def test_release_resets(self):
        clock = FakeClock()
        timer = HoldTimer(2.0, clock)
        timer.update(True)
        clock.now = 1.5
        timer.update(True)
        self.assertEqual(timer.update(False), 0.0)
        clock.now = 2.0
        self.assertEqual(timer.update(True), 0.0)
        self.assertFalse(timer.completed)

    def test_zero_hold(self):
        timer = HoldTimer(0, FakeClock())
        self.assertEqual(timer.update(True), 1.0)

    def test_solve_time(self):
        self.assertEqual(solve_time_ms(10.0, 15.0, 2.0), 3000.0)
        self.assertEqual(solve_time_ms(10.0, 11.0, 2.0), 0.0)


class TestPracticeStats(unittest.TestCase):
    def test_record_round(self):
        stats = PracticeStats()
        c, g = _template(0, "major"), _template(7, "major")
        stats.record_round(c, True, 1500.0)
        stats.record_round(c, False, 900.0)
        stats.record_round(g, True, 500.0)
        stats.record_round(None, True, 100.0)

        major = stats.by_type["major"]
        self.assertEqual((major["attempts"], major["correct"], major["total_time_ms"]), (3, 2, 2000.0))
        self.assertEqual(stats.by_root[0]["attempts"], 2)
        self.assertEqual(stats.by_root[0]["correct"], 1)
        self.assertEqual(stats.by_chord["major@0"]["type_key"], "major")
        self.assertEqual(stats.by_chord["major@7"]["root"], 7)

        self.assertAlmostEqual(PracticeStats.accuracy(major), 2 / 3)
        self.assertEqual(PracticeStats.average_time_ms(major), 1000.0)
        self.assertEqual(PracticeStats.accuracy({"attempts": 0, "correct": 0}), 0.0)
        self.assertIsNone(PracticeStats.average_time_ms({"correct": 0, "total_time_ms": 0.0}))

    def test_to_dict_and_reset(self):
        stats = PracticeStats()
        stats.record_round(_template(2, "minor"), True, 10.0)
        snapshot = stats.to_dict()
        snapshot["by_type"]["minor"]["attempts"] = 99
        self.assertEqual(stats.by_type["minor"]["attempts"], 1)

        stats.reset()
        self.assertEqual(stats.to_dict(), {"by_type": {}, "by_root": {}, "by_chord": {}})


class TestPracticeSession(unittest.TestCase):
    def setUp(self):
        regen_templates()
        self.clock = FakeClock()
        self.session = PracticeSession({"minor"}, {9}, hold_seconds=2.0,
                                       rng=random.Random(3), clock=self.clock)

    def test_initial_target(self):
        self.assertEqual((self.session.current.root, self.session.current.type_key), (9, "minor"))
        self.assertEqual(self.session.voicing.notes, (57, 60, 64))

    def test_round_flow(self):
        s = self.session
        self.assertTrue(s.update([57, 60, 64]).solved)
        self.clock.now = 1.0
        s.update([57, 60, 64])
        self.assertEqual(s.score, 0)
        self.clock.now = 2.0
        s.update([57, 60, 64])
        self.assertEqual(s.score, 1)
        self.assertTrue(s.solved)

        # Still holding: nothing more is scored
        s.update([57, 60, 64])
        self.assertEqual(s.score, 1)

        # Release moves on to the next target
        check = s.update([])
        self.assertFalse(s.solved)
        self.assertFalse(check.solved)

        # A wrong note makes the next round count as incorrect
        self.clock.now = 3.0
        self.assertEqual(s.update([57, 60, 63, 64]).extra, (3,))
        s.update([57, 60, 64])
        self.clock.now = 5.0
        s.update([57, 60, 64])
        self.assertEqual(s.score, 2)

        minor = s.stats.by_type["minor"]
        self.assertEqual(minor["attempts"], 2)
        self.assertEqual(minor["correct"], 1)
        self.assertEqual(minor["total_time_ms"], 0.0)

    def test_empty_pool(self):
        session = PracticeSession(set(), {0}, clock=self.clock)
        self.assertIsNone(session.current)
        self.assertIsNone(session.voicing)
        self.assertIsNone(session.update([60, 64, 67]))

    def test_inversions(self):
        session = PracticeSession({"major"}, {0}, allow_inversions=True,
                                  rng=random.Random(11), clock=self.clock)
        v = session.voicing
        self.assertIn(v.inversion, range(session.current.size))
        self.assertEqual(v.notes[0] % 12, v.ordered_pcs[0])

    def test_steady_hold_scored_by_tick(self):
        held = HeldNotes(on_change=self.session.update)
        for note in (57, 60, 64):
            held.note_on(note)
        self.clock.now = 1.0
        self.session.tick()
        self.assertEqual(self.session.score, 0)
        self.assertAlmostEqual(self.session.timer.progress, 0.5)

        self.clock.now = 10.0
        self.session.tick()
        self.assertEqual(self.session.score, 1)
        self.assertTrue(self.session.solved)
        self.assertEqual(self.session.stats.by_type["minor"]["correct"], 1)

    def test_tick_after_release_resets_hold(self):
        held = HeldNotes(on_change=self.session.update)
        for note in (57, 60, 64):
            held.note_on(note)
        self.clock.now = 1.5
        held.note_off(64)
        self.clock.now = 5.0
        self.session.tick()
        self.assertEqual(self.session.score, 0)
        self.assertEqual(self.session.timer.progress, 0.0)

    def test_tick_before_any_input(self):
        self.clock.now = 5.0
        check = self.session.tick()
        self.assertFalse(check.solved)
        self.assertEqual(self.session.score, 0)


if __name__ == "__main__":
    unittest.main()
