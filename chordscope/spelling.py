"""Enharmonic spelling of chord notes.

A pitch class can be written several ways (D♯ / E♭, B / C♭). The right
choice depends on the tonal centre: in B major the third is D♯, in C minor
the third is E♭. ``spell()`` therefore works on a specific rotation of a
``PitchSet`` - the element at ``reference_index`` is the reference (usually
the chord root) - and gives every note the letter that matches the scale
degree it plays above that reference.

Two policies are available:

- ``prefer_simple=True`` tries each plausible spelling of the reference
  and keeps the one whose chord needs the fewest accidentals, then rewrites
  any double accidental as its simplest enharmonic (``B♭♭`` -> ``A``).
- ``prefer_simple=False`` takes the reference spelling from a fixed table
  and keeps the strict degree spelling, double accidentals included.

Example:
	```python
	chord = PitchSet((3, 6, 9, 0))                  # E♭ dim7
	spell(chord, 0, prefer_simple=False)            # ['E♭', 'G♭', 'B♭♭', 'D♭♭']
	spell(chord, 0, prefer_simple=True)             # ['D♯', 'F♯', 'A', 'C']
	```
"""

import typing

import chordscope.intervals
import chordscope.pitch_set


LETTERS: typing.List[str] = ["C", "D", "E", "F", "G", "A", "B"]

LETTER_PCS: typing.List[int] = [0, 2, 4, 5, 7, 9, 11]

SHARP: str = "♯"
FLAT: str = "♭"

# Reference spelling per pitch class as (letter index, accidental).
DEFAULT_SPELLINGS: typing.List[typing.Tuple[int, int]] = [
	(0, 0),    # C
	(1, -1),   # D♭
	(1, 0),    # D
	(2, -1),   # E♭
	(2, 0),    # E
	(3, 0),    # F
	(3, 1),    # F♯
	(4, 0),    # G
	(5, -1),   # A♭
	(5, 0),    # A
	(6, -1),   # B♭
	(6, 0),    # B
]

# Costs used when choosing between enharmonic spellings of the reference.
ALTERNATE_ROOT_COST: int = 1
WHITE_KEY_ENHARMONIC_COST: int = 4
DOUBLE_ACCIDENTAL_COST: int = 1
WHITE_KEY_NOTE_COST: int = 1


def note_name (letter_index: int, accidental: int) -> str:

	"""Format a letter index and accidental count (``+`` sharp, ``-`` flat)."""

	letter = LETTERS[letter_index % 7]

	if accidental > 0:
		return letter + SHARP * accidental

	return letter + FLAT * (-accidental)


def accidental_for (letter_index: int, pitch_class: int) -> int:

	"""Return the accidental that turns a letter into the given pitch class (-6..5)."""

	return ((pitch_class - LETTER_PCS[letter_index % 7] + 6) % 12) - 6


def is_white_key_enharmonic (letter_index: int, accidental: int) -> bool:

	"""True for spellings like E♯, B♯, F♭ and C♭ that land on a white key."""

	return accidental != 0 and (LETTER_PCS[letter_index % 7] + accidental) % 12 in LETTER_PCS


def simplest_name (pitch_class: int, accidental_hint: int) -> str:

	"""Spell a pitch class with at most one accidental.

	White keys get their natural letter. Black keys take a sharp when
	``accidental_hint`` is positive and a flat otherwise.
	"""

	pc = pitch_class % 12

	if pc in LETTER_PCS:
		return LETTERS[LETTER_PCS.index(pc)]

	if accidental_hint > 0:
		return note_name(LETTER_PCS.index(pc - 1), 1)

	return note_name(LETTER_PCS.index((pc + 1) % 12), -1)


def reference_spellings (pitch_class: int) -> typing.List[typing.Tuple[int, int, int]]:

	"""List candidate spellings for a reference pitch class.

	Returns ``(letter_index, accidental, cost)`` tuples, the table spelling
	first with cost 0.
	"""

	pc = pitch_class % 12
	default_letter, default_accidental = DEFAULT_SPELLINGS[pc]
	candidates = [(default_letter, default_accidental, 0)]

	for letter_index in range(7):

		accidental = accidental_for(letter_index, pc)

		if abs(accidental) > 1 or (letter_index, accidental) == (default_letter, default_accidental):
			continue

		cost = WHITE_KEY_ENHARMONIC_COST if is_white_key_enharmonic(letter_index, accidental) else ALTERNATE_ROOT_COST
		candidates.append((letter_index, accidental, cost))

	return candidates


def spell (
	pitch_set: chordscope.pitch_set.PitchSet,
	reference_index: int = 0,
	prefer_simple: bool = True
) -> typing.List[str]:

	"""Name every note of a pitch set relative to one reference element.

	Parameters:
		pitch_set: The notes to spell (absolute pitches or pitch classes).
		reference_index: Element treated as the tonal centre (taken modulo
			the length). Rotating the set so the root sits at index 0 and
			passing ``0`` is equivalent.
		prefer_simple: Favour fewer accidentals over strict degree spelling.

	Returns:
		One name per element of ``pitch_set``, in the same order. Elements
		sharing a pitch class share a name. Empty sets give an empty list.

	Raises:
		ValueError: If the set does not use a 12-step modulus.
	"""

	if len(pitch_set) == 0:
		return []

	if pitch_set.modulus != 12:
		raise ValueError(f"Spelling requires a 12-step modulus, got {pitch_set.modulus}")

	reference_pc = pitch_set[reference_index % len(pitch_set)] % 12
	present = sorted(set(pitch_set.intervals_from(reference_pc)))
	analysis = chordscope.intervals.classify_intervals(present)

	degrees = {
		interval: chordscope.intervals.degree_for(interval, analysis.roles.get(interval))
		for interval in present
	}

	if prefer_simple:
		candidates = reference_spellings(reference_pc)
	else:
		candidates = reference_spellings(reference_pc)[:1]

	best_names: typing.Optional[typing.Dict[int, str]] = None
	best_cost = float("inf")

	for letter_index, accidental, root_cost in candidates:

		spelled = _spell_degrees(reference_pc, letter_index, degrees)
		cost = root_cost + sum(_note_cost(letter, acc) for letter, acc in spelled.values())

		if cost < best_cost:
			best_cost = cost
			best_names = _format(reference_pc, spelled, accidental, prefer_simple)

	assert best_names is not None

	return [best_names[(p - reference_pc) % 12] for p in pitch_set]


def spell_map (
	pitch_set: chordscope.pitch_set.PitchSet,
	reference_index: int = 0,
	prefer_simple: bool = True
) -> typing.Dict[int, str]:

	"""Like ``spell()`` but keyed by pitch class."""

	names = spell(pitch_set, reference_index, prefer_simple)

	return {p % 12: name for p, name in zip(pitch_set, names)}


def _spell_degrees (
	reference_pc: int,
	root_letter: int,
	degrees: typing.Dict[int, int]
) -> typing.Dict[int, typing.Tuple[int, int]]:

	"""Return ``interval -> (letter_index, accidental)`` for a root spelling."""

	spelled: typing.Dict[int, typing.Tuple[int, int]] = {}

	for interval, degree in degrees.items():
		letter = (root_letter + degree) % 7
		spelled[interval] = (letter, accidental_for(letter, reference_pc + interval))

	return spelled


def _note_cost (letter_index: int, accidental: int) -> int:

	cost = abs(accidental)

	if abs(accidental) > 1:
		cost += DOUBLE_ACCIDENTAL_COST

	if is_white_key_enharmonic(letter_index, accidental):
		cost += WHITE_KEY_NOTE_COST

	return cost


def _format (
	reference_pc: int,
	spelled: typing.Dict[int, typing.Tuple[int, int]],
	root_accidental: int,
	prefer_simple: bool
) -> typing.Dict[int, str]:

	names: typing.Dict[int, str] = {}

	for interval, (letter, accidental) in spelled.items():

		if prefer_simple and abs(accidental) > 1:
			hint = accidental if root_accidental == 0 else root_accidental
			names[interval] = simplest_name(reference_pc + interval, hint)
		else:
			names[interval] = note_name(letter, accidental)

	return names
