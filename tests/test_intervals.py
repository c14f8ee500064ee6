import chordscope.intervals
import chordscope.roles


NoteRole = chordscope.roles.NoteRole


def test_major_triad () -> None:

	"""0 4 7 should be a major third, perfect fifth, no seventh."""

	analysis = chordscope.intervals.classify_intervals([0, 4, 7])

	assert analysis.third == chordscope.roles.ThirdQuality.MAJOR
	assert analysis.fifth == chordscope.roles.FifthQuality.PERFECT
	assert analysis.seventh == chordscope.roles.SeventhQuality.OMITTED
	assert analysis.roles == {0: NoteRole.ROOT, 4: NoteRole.MAJOR_THIRD, 7: NoteRole.FIFTH}
	assert analysis.extensions == ()


def test_lone_root_has_no_qualities () -> None:

	"""A single pitch class yields '--' for every slot."""

	analysis = chordscope.intervals.classify_intervals([0])

	assert analysis.third == chordscope.roles.ThirdQuality.NONE
	assert analysis.fifth == chordscope.roles.FifthQuality.NONE
	assert analysis.seventh == chordscope.roles.SeventhQuality.NONE
	assert analysis.roles == {0: NoteRole.ROOT}


def test_sixth_without_seventh () -> None:

	"""9 semitones fills the seventh slot when no seventh is present."""

	analysis = chordscope.intervals.classify_intervals([0, 4, 7, 9])

	assert analysis.seventh == chordscope.roles.SeventhQuality.SIXTH
	assert analysis.roles[9] == NoteRole.SIXTH
	assert analysis.extensions == ()


def test_sixth_becomes_thirteenth_with_seventh () -> None:

	"""With a minor seventh present, 9 semitones is the 13th."""

	analysis = chordscope.intervals.classify_intervals([0, 4, 7, 9, 10])

	assert analysis.seventh == chordscope.roles.SeventhQuality.MINOR
	assert analysis.roles[9] == NoteRole.SIXTH
	assert analysis.extensions == ("13",)


def test_diminished_seventh () -> None:

	"""0 3 6 9 should classify 9 as a diminished seventh, not a sixth."""

	analysis = chordscope.intervals.classify_intervals([0, 3, 6, 9])

	assert analysis.third == chordscope.roles.ThirdQuality.MINOR
	assert analysis.fifth == chordscope.roles.FifthQuality.DIMINISHED
	assert analysis.seventh == chordscope.roles.SeventhQuality.DIMINISHED
	assert analysis.roles[9] == NoteRole.DIMINISHED_SEVENTH
	assert analysis.extensions == ()


def test_minor_seventh_alongside_major_seventh_is_sharp_thirteen () -> None:

	"""10 next to 11 cannot be a second seventh; it becomes #13."""

	analysis = chordscope.intervals.classify_intervals([0, 4, 7, 10, 11])

	assert analysis.seventh == chordscope.roles.SeventhQuality.MAJOR
	assert analysis.roles[10] == NoteRole.AUGMENTED_SIXTH
	assert "♯13" in analysis.extensions


def test_sharp_nine_next_to_major_third () -> None:

	"""3 semitones alongside a major third is the #9."""

	analysis = chordscope.intervals.classify_intervals([0, 3, 4, 7, 10])

	assert analysis.third == chordscope.roles.ThirdQuality.MAJOR
	assert analysis.roles[3] == NoteRole.AUGMENTED_SECOND
	assert analysis.extensions == ("♯9",)


def test_add_prefix_without_seventh () -> None:

	"""Extensions on a chord without a true seventh are 'add' tones."""

	assert chordscope.intervals.classify_intervals([0, 2, 4, 7]).extensions == ("add9",)
	assert chordscope.intervals.classify_intervals([0, 2, 4, 7, 9]).extensions == ("add9",)
	assert chordscope.intervals.classify_intervals([0, 2, 4, 7, 10]).extensions == ("9",)


def test_suspensions () -> None:

	"""Without a third, 5 is sus4 before 2 is sus2."""

	sus4 = chordscope.intervals.classify_intervals([0, 5, 7])
	sus2 = chordscope.intervals.classify_intervals([0, 2, 7])
	both = chordscope.intervals.classify_intervals([0, 2, 5, 7])

	assert sus4.third == chordscope.roles.ThirdQuality.SUS4
	assert sus2.third == chordscope.roles.ThirdQuality.SUS2
	assert both.third == chordscope.roles.ThirdQuality.SUS4
	assert both.extensions == ("add9",)


def test_augmented_preferred_over_diminished_with_major_third () -> None:

	"""A major third takes 8 as its fifth before 6."""

	analysis = chordscope.intervals.classify_intervals([0, 4, 6, 8])

	assert analysis.fifth == chordscope.roles.FifthQuality.AUGMENTED
	assert analysis.roles[6] == NoteRole.AUGMENTED_FOURTH


def test_minor_third_never_takes_augmented_fifth () -> None:

	"""A minor third with 8 leaves the fifth omitted and 8 as b13."""

	analysis = chordscope.intervals.classify_intervals([0, 3, 8])

	assert analysis.fifth == chordscope.roles.FifthQuality.OMITTED
	assert analysis.extensions == ("add♭13",)


def test_every_interval_gets_a_role () -> None:

	"""Every present interval has exactly one role, even the chromatic cluster."""

	analysis = chordscope.intervals.classify_intervals(range(12))

	assert set(analysis.roles) == set(range(12))


def test_other_modulus_is_unclassified () -> None:

	"""Outside 12 steps every non-root interval is generic."""

	analysis = chordscope.intervals.classify_intervals([0, 5, 11], modulus=19)

	assert analysis.roles[5] == NoteRole.UNCLASSIFIED
	assert analysis.unclassified_count() == 2


def test_degree_for () -> None:

	"""Roles decide the letter step; unknown roles fall back to the interval table."""

	assert chordscope.intervals.degree_for(3, NoteRole.AUGMENTED_SECOND) == 1
	assert chordscope.intervals.degree_for(3, NoteRole.MINOR_THIRD) == 2
	assert chordscope.intervals.degree_for(9, NoteRole.DIMINISHED_SEVENTH) == 6
	assert chordscope.intervals.degree_for(6, None) == 3
