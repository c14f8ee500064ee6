"""Interval classification relative to a chord root.

``classify_intervals()`` is the rule table at the heart of chord analysis.
Given the intervals (0-11 semitones) a set of notes forms above one candidate
root, it decides which interval fills the third, fifth and seventh slots and
what every remaining interval means as an extension.

Slot rules, in priority order:

- third: 4 major, 3 minor, 5 sus4, 2 sus2, otherwise omitted.
- fifth: 7 perfect. Without 7, a major third takes 8 as augmented before 6 as
  diminished; a minor third only takes 6; a suspended or omitted third takes
  6 then 8. Otherwise omitted.
- seventh: 11 major, 10 minor. Without either, 9 is the diminished seventh
  when the third is minor and the fifth diminished, and a sixth otherwise.

Every interval not claimed by a slot is an extension: 1 b9, 2 9, 3 #9, 5 11,
6 #11, 8 b13, 9 13, 10 #13. Chords without a true seventh name these as
``add`` tones.
"""

import dataclasses
import typing

import chordscope.roles


# (interval, role, label) in the order extensions are written.
EXTENSION_RULES: typing.List[typing.Tuple[int, chordscope.roles.NoteRole, str]] = [
	(1, chordscope.roles.NoteRole.MINOR_SECOND, "♭9"),
	(2, chordscope.roles.NoteRole.SECOND, "9"),
	(3, chordscope.roles.NoteRole.AUGMENTED_SECOND, "♯9"),
	(5, chordscope.roles.NoteRole.FOURTH, "11"),
	(6, chordscope.roles.NoteRole.AUGMENTED_FOURTH, "♯11"),
	(8, chordscope.roles.NoteRole.MINOR_SIXTH, "♭13"),
	(9, chordscope.roles.NoteRole.SIXTH, "13"),
	(10, chordscope.roles.NoteRole.AUGMENTED_SIXTH, "♯13"),
]

# Letter steps above the root for each role (0 = unison, 2 = third, ...).
ROLE_DEGREES: typing.Dict[chordscope.roles.NoteRole, int] = {
	chordscope.roles.NoteRole.ROOT: 0,
	chordscope.roles.NoteRole.MINOR_SECOND: 1,
	chordscope.roles.NoteRole.SECOND: 1,
	chordscope.roles.NoteRole.AUGMENTED_SECOND: 1,
	chordscope.roles.NoteRole.MINOR_THIRD: 2,
	chordscope.roles.NoteRole.MAJOR_THIRD: 2,
	chordscope.roles.NoteRole.FOURTH: 3,
	chordscope.roles.NoteRole.AUGMENTED_FOURTH: 3,
	chordscope.roles.NoteRole.DIMINISHED_FIFTH: 4,
	chordscope.roles.NoteRole.FIFTH: 4,
	chordscope.roles.NoteRole.AUGMENTED_FIFTH: 4,
	chordscope.roles.NoteRole.MINOR_SIXTH: 5,
	chordscope.roles.NoteRole.SIXTH: 5,
	chordscope.roles.NoteRole.AUGMENTED_SIXTH: 5,
	chordscope.roles.NoteRole.DIMINISHED_SEVENTH: 6,
	chordscope.roles.NoteRole.MINOR_SEVENTH: 6,
	chordscope.roles.NoteRole.MAJOR_SEVENTH: 6,
}

# Plain interval-to-degree table for notes without a classified role.
DEFAULT_DEGREES: typing.List[int] = [0, 1, 1, 2, 2, 3, 3, 4, 5, 5, 6, 6]


@dataclasses.dataclass(frozen=True)
class IntervalAnalysis:

	"""Slot qualities and per-interval roles for one candidate root."""

	third: chordscope.roles.ThirdQuality
	fifth: chordscope.roles.FifthQuality
	seventh: chordscope.roles.SeventhQuality
	roles: typing.Dict[int, chordscope.roles.NoteRole]
	extensions: typing.Tuple[str, ...] = ()


	def has_true_seventh (self) -> bool:

		"""True when a minor, major or diminished seventh is present."""

		return self.seventh in (
			chordscope.roles.SeventhQuality.MAJOR,
			chordscope.roles.SeventhQuality.MINOR,
			chordscope.roles.SeventhQuality.DIMINISHED,
		)


	def unclassified_count (self) -> int:

		"""Number of intervals that carry the generic extension role."""

		return sum(1 for role in self.roles.values() if role == chordscope.roles.NoteRole.UNCLASSIFIED)


def classify_intervals (intervals: typing.Iterable[int], modulus: int = 12) -> IntervalAnalysis:

	"""Classify intervals above a root into chord slots and extensions.

	Parameters:
		intervals: Semitone distances above the root. Values are reduced
			modulo ``modulus``; the root itself (0) is always assumed present.
		modulus: Steps per octave. Only 12 has a slot vocabulary; any other
			value leaves every non-root interval unclassified.

	Returns:
		An ``IntervalAnalysis``. A lone root yields ``"--"`` qualities.

	Example:
		```python
		analysis = classify_intervals([0, 4, 7, 10, 11])
		analysis.seventh      # SeventhQuality.MAJOR
		analysis.extensions   # ("♯13",)
		```
	"""

	present = {i % modulus for i in intervals}
	present.add(0)

	roles: typing.Dict[int, chordscope.roles.NoteRole] = {0: chordscope.roles.NoteRole.ROOT}

	if present == {0}:
		return IntervalAnalysis(
			third = chordscope.roles.ThirdQuality.NONE,
			fifth = chordscope.roles.FifthQuality.NONE,
			seventh = chordscope.roles.SeventhQuality.NONE,
			roles = roles
		)

	if modulus != 12:
		for interval in sorted(present - {0}):
			roles[interval] = chordscope.roles.NoteRole.UNCLASSIFIED

		return IntervalAnalysis(
			third = chordscope.roles.ThirdQuality.OMITTED,
			fifth = chordscope.roles.FifthQuality.OMITTED,
			seventh = chordscope.roles.SeventhQuality.OMITTED,
			roles = roles
		)

	third = _classify_third(present, roles)
	fifth = _classify_fifth(present, third, roles)
	seventh = _classify_seventh(present, third, fifth, roles)

	analysis = IntervalAnalysis(third=third, fifth=fifth, seventh=seventh, roles=roles)
	use_add = not analysis.has_true_seventh()

	extensions: typing.List[str] = []

	for interval, role, label in EXTENSION_RULES:

		if interval not in present or interval in roles:
			continue

		roles[interval] = role
		extensions.append(f"add{label}" if use_add else label)

	for interval in sorted(present):
		if interval not in roles:
			roles[interval] = chordscope.roles.NoteRole.UNCLASSIFIED

	return dataclasses.replace(analysis, roles=roles, extensions=tuple(extensions))


def degree_for (interval: int, role: typing.Optional[chordscope.roles.NoteRole]) -> int:

	"""Return the letter step above the root for an interval and its role."""

	if role is not None and role in ROLE_DEGREES:
		return ROLE_DEGREES[role]

	return DEFAULT_DEGREES[interval % 12]


def _classify_third (
	present: typing.Set[int],
	roles: typing.Dict[int, chordscope.roles.NoteRole]
) -> chordscope.roles.ThirdQuality:

	if 4 in present:
		roles[4] = chordscope.roles.NoteRole.MAJOR_THIRD
		return chordscope.roles.ThirdQuality.MAJOR

	if 3 in present:
		roles[3] = chordscope.roles.NoteRole.MINOR_THIRD
		return chordscope.roles.ThirdQuality.MINOR

	if 5 in present:
		roles[5] = chordscope.roles.NoteRole.FOURTH
		return chordscope.roles.ThirdQuality.SUS4

	if 2 in present:
		roles[2] = chordscope.roles.NoteRole.SECOND
		return chordscope.roles.ThirdQuality.SUS2

	return chordscope.roles.ThirdQuality.OMITTED


def _classify_fifth (
	present: typing.Set[int],
	third: chordscope.roles.ThirdQuality,
	roles: typing.Dict[int, chordscope.roles.NoteRole]
) -> chordscope.roles.FifthQuality:

	if 7 in present:
		roles[7] = chordscope.roles.NoteRole.FIFTH
		return chordscope.roles.FifthQuality.PERFECT

	if third == chordscope.roles.ThirdQuality.MAJOR:
		order = (8, 6)
	elif third == chordscope.roles.ThirdQuality.MINOR:
		order = (6,)
	else:
		order = (6, 8)

	for interval in order:

		if interval not in present:
			continue

		if interval == 6:
			roles[6] = chordscope.roles.NoteRole.DIMINISHED_FIFTH
			return chordscope.roles.FifthQuality.DIMINISHED

		roles[8] = chordscope.roles.NoteRole.AUGMENTED_FIFTH
		return chordscope.roles.FifthQuality.AUGMENTED

	return chordscope.roles.FifthQuality.OMITTED


def _classify_seventh (
	present: typing.Set[int],
	third: chordscope.roles.ThirdQuality,
	fifth: chordscope.roles.FifthQuality,
	roles: typing.Dict[int, chordscope.roles.NoteRole]
) -> chordscope.roles.SeventhQuality:

	if 11 in present:
		roles[11] = chordscope.roles.NoteRole.MAJOR_SEVENTH
		return chordscope.roles.SeventhQuality.MAJOR

	if 10 in present:
		roles[10] = chordscope.roles.NoteRole.MINOR_SEVENTH
		return chordscope.roles.SeventhQuality.MINOR

	if 9 in present:

		# Minor third over a diminished fifth makes 9 the fully diminished seventh.
		if third == chordscope.roles.ThirdQuality.MINOR and fifth == chordscope.roles.FifthQuality.DIMINISHED:
			roles[9] = chordscope.roles.NoteRole.DIMINISHED_SEVENTH
			return chordscope.roles.SeventhQuality.DIMINISHED

		roles[9] = chordscope.roles.NoteRole.SIXTH
		return chordscope.roles.SeventhQuality.SIXTH

	return chordscope.roles.SeventhQuality.OMITTED
