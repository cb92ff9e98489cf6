"""
The live set of sounding notes, fed from MIDI channel messages.

Messages arrive either as raw bytes from a port callback or as mido.Message
objects (e.g. iterating `mido.open_input()`). Only note-on / note-off matter
here; a note-on with velocity 0 is a note-off (running-status keyboards send
it that way).
"""
import collections

import mido

NoteMessage = collections.namedtuple("NoteMessage", ["kind", "note", "velocity", "channel"])


def _note_message(msg):
    if msg.type == "note_on" and msg.velocity > 0:
        return NoteMessage("on", msg.note, msg.velocity, msg.channel)
    if msg.type == "note_off" or (msg.type == "note_on" and msg.velocity == 0):
        return NoteMessage("off", msg.note, msg.velocity, msg.channel)
    return None


def decode_message(data):
    """
    Return a NoteMessage('on'|'off', ...) or None for anything that is not a
    well-formed note event.

    `data` is a mido.Message or a sequence of MIDI bytes. Truncated, over-long
    and out-of-range byte sequences are rejected by mido and come back as None.
    """
    if data is None:
        return None
    if isinstance(data, mido.Message):
        return _note_message(data)
    if len(data) == 0:
        return None
    try:
        msg = mido.Message.from_bytes(data)
    except (ValueError, TypeError):
        return None
    return _note_message(msg)


class HeldNotes:
    """Notes currently held down. `on_change` receives the sorted notes after every change."""

    def __init__(self, on_change=None):
        self._held = set()
        self.on_change = on_change

    def _changed(self):
        if self.on_change is not None:
            self.on_change(self.notes)

    def note_on(self, note):
        if note in self._held:
            return
        self._held.add(note)
        self._changed()

    def note_off(self, note):
        if note not in self._held:
            return
        self._held.discard(note)
        self._changed()

    def feed(self, data):
        """Apply one MIDI message (raw bytes or mido.Message); returns the decoded message or None."""
        msg = decode_message(data)
        if msg is None:
            return None
        if msg.kind == "on":
            self.note_on(msg.note)
        else:
            self.note_off(msg.note)
        return msg

    def clear(self):
        if not self._held:
            return
        self._held.clear()
        self._changed()

    @property
    def notes(self) -> tuple:
        return tuple(sorted(self._held))

    def __len__(self):
        return len(self._held)

    def __contains__(self, note):
        return note in self._held

    def __iter__(self):
        return iter(self.notes)
