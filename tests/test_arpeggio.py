import pytest

import chordscope.arpeggio


def test_pitch_order_over_octaves () -> None:

	"""Pitch order repeats one octave higher for each extra octave."""

	assert chordscope.arpeggio.arpeggio_notes([64, 60, 67, 60], octaves=2) == [60, 64, 67, 72, 76, 79]


def test_harmonic_order () -> None:

	"""Harmonic order sorts by interval above the root."""

	assert chordscope.arpeggio.arpeggio_notes([67, 64, 72], sort_mode="harmonic", root_pitch=60) == [72, 64, 67]


def test_empty_notes () -> None:

	"""No notes make an empty arpeggio."""

	assert chordscope.arpeggio.arpeggio_notes([]) == []


def test_invalid_arguments () -> None:

	"""Unknown modes and zero octaves are rejected."""

	with pytest.raises(ValueError):
		chordscope.arpeggio.arpeggio_notes([60], sort_mode="loudness")

	with pytest.raises(ValueError):
		chordscope.arpeggio.arpeggio_notes([60], octaves=0)

	with pytest.raises(ValueError):
		chordscope.arpeggio.ArpeggioCursor([60], pattern="sideways")


def test_up_and_down_patterns () -> None:

	"""Up cycles from the bottom; down cycles from the top."""

	up = chordscope.arpeggio.ArpeggioCursor([60, 64, 67], pattern="up")
	down = chordscope.arpeggio.ArpeggioCursor([60, 64, 67], pattern="down")

	assert [up.next() for _ in range(4)] == [60, 64, 67, 60]
	assert [down.next() for _ in range(4)] == [67, 64, 60, 67]


def test_updown_bounces_without_repeating_ends () -> None:

	"""Up-down turns at each end without playing the end note twice."""

	cursor = chordscope.arpeggio.ArpeggioCursor([60, 64, 67, 72], pattern="updown")

	assert [cursor.next() for _ in range(8)] == [60, 64, 67, 72, 67, 64, 60, 64]


def test_random_is_seedable () -> None:

	"""Seeded random cursors repeat and only pick sounding notes."""

	notes = [60, 64, 67, 71]

	first = chordscope.arpeggio.ArpeggioCursor(notes, pattern="random", seed=7)
	second = chordscope.arpeggio.ArpeggioCursor(notes, pattern="random", seed=7)

	picks = [first.next() for _ in range(16)]

	assert picks == [second.next() for _ in range(16)]
	assert set(picks) <= set(notes)


def test_update_and_empty () -> None:

	"""A cursor survives the chord shrinking and returns None when empty."""

	cursor = chordscope.arpeggio.ArpeggioCursor([60, 64, 67, 72], pattern="up")

	for _ in range(3):
		cursor.next()

	cursor.update([60, 64])

	assert cursor.next() in (60, 64)

	cursor.update([])

	assert cursor.next() is None
