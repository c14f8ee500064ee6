"""Closed vocabularies for chord analysis.

Every note in an analysed chord receives exactly one ``NoteRole``, named by
the interval it forms with the chosen root (``"3min"``, ``"5dim"``, ``"6"``).
The three ``*Quality`` enumerations describe the chord as a whole: what kind
of third defines it, how stable its fifth is and which seventh (or sixth)
gives it its function.

``DisplayRole`` is the flatter vocabulary used by presentation layers, which
colour notes as root, third, fifth, seventh or one specific extension.

All members are ``str`` subclasses so they serialise straight into JSON
envelopes.
"""

import enum
import typing


class NoteRole (str, enum.Enum):

	"""Theoretical role of one note relative to a chord root."""

	ROOT = "root"
	MINOR_SECOND = "2min"
	SECOND = "2"
	AUGMENTED_SECOND = "2aug"
	MINOR_THIRD = "3min"
	MAJOR_THIRD = "3maj"
	FOURTH = "4"
	AUGMENTED_FOURTH = "4aug"
	DIMINISHED_FIFTH = "5dim"
	FIFTH = "5"
	AUGMENTED_FIFTH = "5aug"
	MINOR_SIXTH = "6min"
	SIXTH = "6"
	DIMINISHED_SEVENTH = "7dim"
	AUGMENTED_SIXTH = "6aug"
	MINOR_SEVENTH = "7min"
	MAJOR_SEVENTH = "7maj"
	UNCLASSIFIED = "ext"


class ThirdQuality (str, enum.Enum):

	"""Character of the chord's third (or the tone replacing it)."""

	MAJOR = "Major"
	MINOR = "Minor"
	SUS2 = "Sus 2"
	SUS4 = "Sus 4"
	OMITTED = "Omitted"
	NONE = "--"


class FifthQuality (str, enum.Enum):

	"""Stability of the chord, judged by its fifth."""

	PERFECT = "Perfect"
	DIMINISHED = "Diminished"
	AUGMENTED = "Augmented"
	OMITTED = "Omitted"
	NONE = "--"


class SeventhQuality (str, enum.Enum):

	"""Function of the chord's seventh slot."""

	MAJOR = "Maj 7"
	MINOR = "Min 7"
	SIXTH = "6"
	DIMINISHED = "Dim 7"
	OMITTED = "Omitted"
	NONE = "--"


class DisplayRole (str, enum.Enum):

	"""Presentation bucket for a note."""

	ROOT = "root"
	THIRD = "third"
	FIFTH = "fifth"
	SEVENTH = "seventh"
	FLAT_NINTH = "b9"
	NINTH = "9"
	SHARP_NINTH = "#9"
	ELEVENTH = "11"
	SHARP_ELEVENTH = "#11"
	FLAT_THIRTEENTH = "b13"
	THIRTEENTH = "13"
	SHARP_THIRTEENTH = "#13"
	EXTENSION = "ext"
	ACTIVE = "active"


EXTENSION_DISPLAY_ROLES: typing.FrozenSet[DisplayRole] = frozenset({
	DisplayRole.FLAT_NINTH,
	DisplayRole.NINTH,
	DisplayRole.SHARP_NINTH,
	DisplayRole.ELEVENTH,
	DisplayRole.SHARP_ELEVENTH,
	DisplayRole.FLAT_THIRTEENTH,
	DisplayRole.THIRTEENTH,
	DisplayRole.SHARP_THIRTEENTH,
	DisplayRole.EXTENSION,
})
