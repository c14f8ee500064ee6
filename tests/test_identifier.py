import pytest

import chordscope.identifier
import chordscope.pitch_set
import chordscope.roles


NoteRole = chordscope.roles.NoteRole


def _identify (notes, **kwargs):

	return chordscope.identifier.identify(chordscope.pitch_set.PitchSet.from_notes(notes).normalize(), **kwargs)


def test_major_triad () -> None:

	"""{0, 4, 7} should read as a C major triad."""

	best = _identify([0, 4, 7])[0]

	assert best.root == 0
	assert best.base == ""
	assert best.display_name == "C"
	assert best.inversion is None
	assert best.roles == {0: NoteRole.ROOT, 4: NoteRole.MAJOR_THIRD, 7: NoteRole.FIFTH}


def test_every_pitch_class_has_a_role () -> None:

	"""Each option should assign exactly one role to every input class."""

	for notes in ([0, 4, 7], [0, 1, 2, 3], [2, 5, 9, 0, 4], [0, 6], [0, 3, 6, 9]):
		classes = {n % 12 for n in notes}
		for option in _identify(notes):
			assert set(option.roles) == classes


def test_diminished_seventh () -> None:

	"""{0, 3, 6, 9} should be a diminished seventh chord with no extensions."""

	best = _identify([0, 3, 6, 9])[0]

	assert best.root == 0
	assert best.base == "dim7"
	assert best.display_name == "Cdim7"
	assert best.roles[9] == NoteRole.DIMINISHED_SEVENTH
	assert best.detailed_quality.seventh_quality == chordscope.roles.SeventhQuality.DIMINISHED
	assert best.detailed_quality.extensions == ()


def test_major_seventh_with_sharp_thirteen () -> None:

	"""{0, 4, 7, 10, 11} should keep 11 as the seventh and name 10 as #13."""

	best = _identify([0, 4, 7, 10, 11])[0]

	assert best.display_name == "Cmaj7(♯13)"
	assert "♯13" in best.detailed_quality.extensions


def test_bass_as_root_forces_the_bass () -> None:

	"""With bass-as-root the lowest note is the root and there is no slash."""

	options = chordscope.identifier.identify(
		chordscope.pitch_set.PitchSet.from_notes([4, 7, 12]).normalize(),
		bass_as_root = True
	)

	assert len(options) == 1
	assert options[0].root == 4
	assert options[0].inversion is None
	assert options[0].display_name == "Emin(add♭13)"


def test_single_note () -> None:

	"""A lone pitch class yields one root-only option."""

	options = _identify([60])

	assert len(options) == 1
	assert options[0].display_name == "C"
	assert options[0].roles == {0: NoteRole.ROOT}
	assert options[0].detailed_quality.third_quality == chordscope.roles.ThirdQuality.NONE
	assert options[0].detailed_quality.fifth_quality == chordscope.roles.FifthQuality.NONE


def test_empty_set () -> None:

	"""No notes, no options."""

	assert chordscope.identifier.identify(chordscope.pitch_set.PitchSet()) == []


def test_inversions_are_ranked () -> None:

	"""C E G B lists Cmaj7 first and the E minor reading as a slash chord."""

	options = _identify([60, 64, 67, 71])

	assert options[0].display_name == "Cmaj7"
	assert options[1].display_name == "Emin(add♭13)/C"
	assert [o.score for o in options] == sorted((o.score for o in options), reverse=True)


def test_sixth_chord_beats_relative_minor_seventh () -> None:

	"""C E G A with C in the bass is C6 first, Am7/C second."""

	options = _identify([60, 64, 67, 69])

	assert options[0].display_name == "C6"
	assert options[0].roles[9] == NoteRole.SIXTH
	assert options[1].display_name == "Amin7/C"


def test_half_diminished () -> None:

	"""B D F A in root position is half-diminished."""

	options = _identify([59, 62, 65, 69])

	assert options[0].display_name == "Bø"
	assert options[1].display_name == "Dmin6/B"


def test_power_chord () -> None:

	"""Root and fifth alone make a power chord."""

	options = _identify([48, 55])

	assert options[0].display_name == "C5"
	assert options[1].display_name == "Gsus4/C"


def test_spelling_preference_changes_root_name () -> None:

	"""A♭ minor is written G♯min with simple spelling."""

	assert _identify([56, 59, 63])[0].display_name == "G♯min"
	assert _identify([56, 59, 63], prefer_simple_spelling=False)[0].display_name == "A♭min"


def test_identify_is_deterministic () -> None:

	"""The same input always gives the same ranked options."""

	assert _identify([0, 2, 5, 7, 10]) == _identify([0, 2, 5, 7, 10])


def test_base_token () -> None:

	"""Base tokens and modifiers follow the slot qualities."""

	Third = chordscope.roles.ThirdQuality
	Fifth = chordscope.roles.FifthQuality
	Seventh = chordscope.roles.SeventhQuality

	assert chordscope.identifier.base_token(Third.MINOR, Fifth.DIMINISHED, Seventh.MINOR) == ("ø", [])
	assert chordscope.identifier.base_token(Third.MAJOR, Fifth.DIMINISHED, Seventh.MINOR) == ("7", ["♭5"])
	assert chordscope.identifier.base_token(Third.MAJOR, Fifth.AUGMENTED, Seventh.OMITTED) == ("aug", [])
	assert chordscope.identifier.base_token(Third.MINOR, Fifth.PERFECT, Seventh.MAJOR) == ("minmaj7", [])
	assert chordscope.identifier.base_token(Third.SUS4, Fifth.PERFECT, Seventh.MINOR) == ("7sus4", [])
	assert chordscope.identifier.base_token(Third.OMITTED, Fifth.PERFECT, Seventh.OMITTED) == ("5", [])
	assert chordscope.identifier.base_token(Third.OMITTED, Fifth.PERFECT, Seventh.MINOR) == ("7", ["omit3"])


def test_compose_name () -> None:

	"""Names join root, base, bracketed tokens and the slash bass."""

	assert chordscope.identifier.compose_name("C", "maj7", ["♯11"], "E") == "Cmaj7(♯11)/E"
	assert chordscope.identifier.compose_name("F♯", "min", [], None) == "F♯min"


def test_option_to_dict () -> None:

	"""Options serialise to the camelCase envelope."""

	data = _identify([0, 4, 7])[0].to_dict()

	assert data["displayName"] == "C"
	assert data["rootDisplayName"] == "C"
	assert data["baseQualityToken"] == ""
	assert data["inversionSuffix"] is None
	assert data["perNoteRole"] == {"0": "root", "4": "3maj", "7": "5"}
	assert data["detailedQuality"]["thirdQuality"] == "Major"


def test_tritone_dyad () -> None:

	"""A bare tritone is a flattened fifth with the third left out."""

	best = _identify([0, 6])[0]

	assert best.root == 0
	assert best.display_name == "C(♭5,omit3)"
	assert best.roles == {0: NoteRole.ROOT, 6: NoteRole.DIMINISHED_FIFTH}
	assert best.detailed_quality.third_quality == chordscope.roles.ThirdQuality.OMITTED
	assert best.detailed_quality.fifth_quality == chordscope.roles.FifthQuality.DIMINISHED
	assert best.detailed_quality.seventh_quality == chordscope.roles.SeventhQuality.OMITTED


def test_absolute_pitches_use_the_lowest_note_as_bass () -> None:

	"""An unsorted set of absolute pitches is read from its lowest note."""

	root_position = chordscope.identifier.identify(chordscope.pitch_set.PitchSet((67, 60, 64)))[0]
	first_inversion = chordscope.identifier.identify(chordscope.pitch_set.PitchSet((72, 64, 67)))[0]

	assert root_position.display_name == "C"
	assert root_position.inversion is None
	assert first_inversion.display_name == "C/E"
	assert first_inversion.inversion == "E"


def test_option_roles_are_read_only () -> None:

	"""Roles cannot be changed after the option is built."""

	option = _identify([0, 4, 7])[0]

	with pytest.raises(TypeError):
		option.roles[4] = NoteRole.MINOR_THIRD  # type: ignore[index]

	assert option.roles[4] == NoteRole.MAJOR_THIRD
