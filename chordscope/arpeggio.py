"""Arpeggio note ordering.

Turns the sounding notes into the cyclic sequence an arpeggiator steps
through. Notes can be ordered by pitch or by harmonic function (interval
above the chord root, so root, third, fifth, seventh come out in that order),
expanded over several octaves, and walked up, down, up-and-down or at random.

Example:
	```python
	order = arpeggio_notes([64, 60, 67], octaves=2)   # [60, 64, 67, 72, 76, 79]

	cursor = ArpeggioCursor(order, pattern="updown")
	[cursor.next() for _ in range(8)]   # 60 64 67 72 76 79 76 72
	```
"""

import random
import typing

import chordscope.pitch_set


PATTERNS: typing.Tuple[str, ...] = ("up", "down", "updown", "random")

SORT_MODES: typing.Tuple[str, ...] = ("pitch", "harmonic")


def arpeggio_notes (
	notes: typing.Iterable[int],
	sort_mode: str = "pitch",
	root_pitch: int = 0,
	octaves: int = 1
) -> typing.List[int]:

	"""Return the notes in arpeggio order, repeated over ``octaves``.

	Parameters:
		notes: Sounding notes (duplicates are dropped).
		sort_mode: ``"pitch"`` (low to high) or ``"harmonic"`` (by interval
			above ``root_pitch``, then by pitch).
		root_pitch: Chord root, used by the harmonic ordering.
		octaves: Number of octave copies (at least 1).

	Raises:
		ValueError: For an unknown sort mode or fewer than one octave.
	"""

	if sort_mode not in SORT_MODES:
		raise ValueError(f"Unknown sort mode {sort_mode!r}. Expected one of {list(SORT_MODES)}")

	if octaves < 1:
		raise ValueError(f"octaves must be at least 1, got {octaves}")

	unique = sorted(set(notes))

	if sort_mode == "harmonic":
		unique.sort(key=lambda n: ((n - root_pitch) % 12, n))

	if not unique:
		return []

	# Octave copies keep the order; element_at lifts each pass by one span.
	ordered = chordscope.pitch_set.PitchSet(data=tuple(unique))

	return [ordered.element_at(i) for i in range(len(unique) * octaves)]


class ArpeggioCursor:

	"""Step through an arpeggio sequence with a playback pattern.

	``"down"`` starts from the top, ``"updown"`` bounces without repeating
	the end notes, ``"random"`` picks uniformly (seedable for repeatable
	output).
	"""

	def __init__ (
		self,
		notes: typing.Sequence[int],
		pattern: str = "up",
		seed: typing.Optional[int] = None
	) -> None:

		if pattern not in PATTERNS:
			raise ValueError(f"Unknown arpeggio pattern {pattern!r}. Expected one of {list(PATTERNS)}")

		self.notes: typing.List[int] = list(notes)
		self.pattern = pattern
		self._rng = random.Random(seed)
		self._index = len(self.notes) - 1 if pattern == "down" else 0
		self._direction = 1


	def update (self, notes: typing.Sequence[int]) -> None:

		"""Replace the sequence, keeping the position where possible."""

		self.notes = list(notes)

		if self.notes:
			self._index = min(self._index, len(self.notes) - 1)
		else:
			self._index = 0


	def next (self) -> typing.Optional[int]:

		"""Return the next note, or ``None`` when the sequence is empty."""

		if not self.notes:
			return None

		if self.pattern == "random":
			return self._rng.choice(self.notes)

		note = self.notes[self._index % len(self.notes)]
		self._advance()

		return note


	def _advance (self) -> None:

		n = len(self.notes)

		if self.pattern == "up":
			self._index = (self._index + 1) % n
			return

		if self.pattern == "down":
			self._index = (self._index - 1) % n
			return

		if n <= 1:
			self._index = 0
			return

		self._index += self._direction

		if self._index >= n - 1:
			self._index = n - 1
			self._direction = -1
		elif self._index <= 0:
			self._index = 0
			self._direction = 1
