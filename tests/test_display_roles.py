import chordscope.display_roles
import chordscope.identifier
import chordscope.pitch_set
import chordscope.roles


DisplayRole = chordscope.roles.DisplayRole


def _best (notes):

	return chordscope.identifier.identify(chordscope.pitch_set.PitchSet.from_notes(notes).normalize())[0]


def _display (notes):

	option = _best(notes)
	return chordscope.display_roles.map_display_roles(option.roles, option.detailed_quality)


def test_triad_roles_and_flags () -> None:

	"""A triad lights root, third and fifth but not the seventh."""

	mapped, flags = _display([0, 4, 7])

	assert mapped == {0: DisplayRole.ROOT, 4: DisplayRole.THIRD, 7: DisplayRole.FIFTH}
	assert flags == chordscope.display_roles.ActivationFlags(True, True, True, False)


def test_suspended_tone_fills_the_third () -> None:

	"""In sus chords the 2 or 4 takes the third slot."""

	sus2, flags = _display([0, 2, 7])
	sus4, _ = _display([0, 5, 7])

	assert sus2[2] == DisplayRole.THIRD
	assert sus4[5] == DisplayRole.THIRD
	assert flags.third_active


def test_suspension_next_to_a_third_is_an_extension () -> None:

	"""With a real third present, 2 is the 9th and 5 is the 11th."""

	mapped, _ = _display([0, 2, 4, 7, 10])

	assert mapped[2] == DisplayRole.NINTH

	mapped, _ = _display([0, 3, 5, 7, 10])

	assert mapped[5] == DisplayRole.ELEVENTH


def test_sixth_fills_the_seventh_slot () -> None:

	"""In a sixth chord, 9 semitones is shown as the seventh."""

	mapped, flags = _display([0, 4, 7, 9])

	assert mapped[9] == DisplayRole.SEVENTH
	assert flags.seventh_active


def test_sixth_with_seventh_is_thirteenth () -> None:

	"""Once a seventh is present, 9 semitones is the 13th."""

	mapped, _ = _display([0, 4, 7, 9, 10])

	assert mapped[9] == DisplayRole.THIRTEENTH
	assert mapped[10] == DisplayRole.SEVENTH


def test_altered_extensions () -> None:

	"""Altered tensions keep their specific codes."""

	mapped, _ = _display([0, 1, 4, 7, 10])

	assert mapped[1] == DisplayRole.FLAT_NINTH
	assert mapped[1] in chordscope.roles.EXTENSION_DISPLAY_ROLES

	mapped, _ = _display([0, 4, 7, 10, 11])

	assert mapped[10] == DisplayRole.SHARP_THIRTEENTH


def test_flags_serialise () -> None:

	"""Flags use camelCase keys."""

	flags = chordscope.display_roles.ActivationFlags(root_active=True)

	assert flags.to_dict() == {"rootActive": True, "thirdActive": False, "fifthActive": False, "seventhActive": False}
