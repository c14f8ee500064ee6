import mido
import pytest

import chordscope.session


def test_note_on_and_off () -> None:

	"""Notes sound while held and stop when released."""

	session = chordscope.session.AnalysisSession()

	session.note_on(60)
	session.note_on(64)
	session.note_off(60)

	assert session.active_notes == {64}
	assert session.to_request().active_pitches == (64,)


def test_sustain_keeps_released_notes () -> None:

	"""With the pedal down, released notes keep sounding until it lifts."""

	session = chordscope.session.AnalysisSession()

	session.note_on(60)
	session.set_sustain(True)
	session.note_on(64)
	session.note_off(60)
	session.note_off(64)

	assert session.active_notes == {60, 64}

	session.note_on(67)
	session.set_sustain(False)

	assert session.active_notes == {67}


def test_note_change_resets_selection () -> None:

	"""Changing the notes returns to the best-guess option."""

	session = chordscope.session.AnalysisSession()
	session.note_on(60)
	session.select_option(2)

	assert session.selected_index == 2

	session.note_on(64)

	assert session.selected_index == 0


def test_negative_selection_raises () -> None:

	"""Option indices cannot be negative."""

	with pytest.raises(ValueError):
		chordscope.session.AnalysisSession().select_option(-1)


def test_toggles_are_in_the_request () -> None:

	"""Bass-as-root and spelling toggles flow into the request."""

	session = chordscope.session.AnalysisSession()
	session.toggle_note(60)
	session.toggle_bass_as_root()
	session.set_prefer_simple_spelling(False)

	request = session.to_request(request_id=5)

	assert request.force_bass_as_root is True
	assert request.prefer_simple_spelling is False
	assert request.request_id == 5

	session.toggle_note(60)

	assert session.active_notes == set()


def test_listeners_run_on_every_change () -> None:

	"""Registered listeners hear about note and option changes."""

	session = chordscope.session.AnalysisSession()
	calls = []

	session.on_change(lambda s: calls.append(sorted(s.active_notes)))

	session.note_on(60)
	session.note_on(60)
	session.select_option(1)
	session.reset()

	assert calls == [[60], [60], []]


def test_apply_midi_messages () -> None:

	"""MIDI note, velocity-zero and sustain messages drive the session."""

	session = chordscope.session.AnalysisSession()

	assert session.apply_message(mido.Message("note_on", note=60, velocity=100))
	assert session.apply_message(mido.Message("note_on", note=64, velocity=90))
	assert session.apply_message(mido.Message("control_change", control=64, value=127))
	assert session.apply_message(mido.Message("note_on", note=60, velocity=0))

	assert session.active_notes == {60, 64}

	assert session.apply_message(mido.Message("control_change", control=64, value=0))

	assert session.active_notes == {64}

	assert session.apply_message(mido.Message("note_off", note=64))
	assert not session.apply_message(mido.Message("control_change", control=1, value=64))
	assert not session.apply_message(mido.Message("pitchwheel", pitch=100))

	assert session.active_notes == set()
