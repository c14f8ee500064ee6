"""Interactive analysis session state.

An ``AnalysisSession`` holds everything that changes while someone plays:
the sounding notes, the keys physically held down, the sustain pedal, the
option the user picked among the ranked chord readings, and the two analysis
toggles (bass-as-root and simple spelling). It turns that state into an
``AnalysisRequest`` on demand.

Any change to the sounding notes resets the selected option to the best
guess, because the option list belongs to the previous chord.

MIDI messages (``mido.Message``) are applied with ``apply_message()``:
note-on adds a note (velocity 0 counts as note-off), note-off removes it
unless the sustain pedal (CC 64) is down, and releasing the pedal drops
every note that is no longer held.
"""

import logging
import typing

import mido

import chordscope.analysis


logger = logging.getLogger(__name__)


SUSTAIN_CC: int = 64

ChangeListener = typing.Callable[["AnalysisSession"], None]


class AnalysisSession:

	"""Owned state for one interactive analysis session."""

	def __init__ (
		self,
		force_bass_as_root: bool = False,
		prefer_simple_spelling: bool = True
	) -> None:

		self.active_notes: typing.Set[int] = set()
		self.held_notes: typing.Set[int] = set()
		self.sustain: bool = False
		self.selected_index: int = 0
		self.force_bass_as_root = force_bass_as_root
		self.prefer_simple_spelling = prefer_simple_spelling
		self._listeners: typing.List[ChangeListener] = []


	def on_change (self, listener: ChangeListener) -> None:

		"""Register a callback run after every state change."""

		self._listeners.append(listener)


	def to_request (self, request_id: int = 0) -> chordscope.analysis.AnalysisRequest:

		"""Snapshot the state as an analysis request."""

		return chordscope.analysis.AnalysisRequest(
			active_pitches = tuple(sorted(self.active_notes)),
			selected_index = self.selected_index,
			force_bass_as_root = self.force_bass_as_root,
			prefer_simple_spelling = self.prefer_simple_spelling,
			request_id = request_id
		)


	def note_on (self, pitch: int) -> None:

		self.held_notes.add(pitch)

		if pitch not in self.active_notes:
			self.active_notes.add(pitch)
			self._notes_changed()


	def note_off (self, pitch: int) -> None:

		self.held_notes.discard(pitch)

		if self.sustain:
			return

		if pitch in self.active_notes:
			self.active_notes.discard(pitch)
			self._notes_changed()


	def toggle_note (self, pitch: int) -> None:

		"""Latch-style input: add the note if silent, remove it if sounding."""

		if pitch in self.active_notes:
			self.active_notes.discard(pitch)
		else:
			self.active_notes.add(pitch)

		self._notes_changed()


	def set_sustain (self, down: bool) -> None:

		"""Press or release the sustain pedal."""

		self.sustain = down

		if down:
			return

		released = self.active_notes - self.held_notes

		if released:
			self.active_notes -= released
			self._notes_changed()


	def select_option (self, index: int) -> None:

		if index < 0:
			raise ValueError(f"Option index must be >= 0, got {index}")

		self.selected_index = index
		self._emit()


	def toggle_bass_as_root (self) -> None:

		self.set_bass_as_root(not self.force_bass_as_root)


	def set_bass_as_root (self, value: bool) -> None:

		self.force_bass_as_root = value
		self._emit()


	def set_prefer_simple_spelling (self, value: bool) -> None:

		self.prefer_simple_spelling = value
		self._emit()


	def reset (self) -> None:

		"""Silence every note and return to the best-guess option."""

		self.active_notes.clear()
		self.held_notes.clear()
		self._notes_changed()


	def apply_message (self, message: mido.Message) -> bool:

		"""Apply a MIDI message. Returns True when the message was used."""

		if message.type == "note_on" and message.velocity > 0:
			self.note_on(message.note)
			return True

		if message.type == "note_off" or (message.type == "note_on" and message.velocity == 0):
			self.note_off(message.note)
			return True

		if message.type == "control_change" and message.control == SUSTAIN_CC:
			self.set_sustain(message.value >= 64)
			return True

		return False


	def _notes_changed (self) -> None:

		self.selected_index = 0
		self._emit()


	def _emit (self) -> None:

		for listener in self._listeners:
			listener(self)
