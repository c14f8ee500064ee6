"""Pitch collections with a modulus and a span.

A ``PitchSet`` keeps absolute pitch values (MIDI note numbers, for example)
together with the number of steps per octave (``modulus``) and the distance
added when indexing wraps past the end (``span``). Pitch-class comparisons
always go through ``% modulus``; the absolute values are preserved so the
lowest sounding note can still be found.

Sets are immutable. ``normalize()`` and ``rotate()`` return new sets.

Example:
	```python
	chord = PitchSet.from_notes([64, 67, 72])   # E G C, E in the bass
	chord.normalize().data                     # (4, 7, 0)
	chord.normalize().rotate(2).data           # (0, 4, 7) - C at index 0
	chord.element_at(4)                        # 79 (G, one octave up)
	```
"""

import dataclasses
import typing


DEFAULT_MODULUS: int = 12


@dataclasses.dataclass(frozen=True)
class PitchSet:

	"""An ordered, immutable sequence of pitches."""

	data: typing.Tuple[int, ...] = ()
	modulus: int = DEFAULT_MODULUS
	span: int = DEFAULT_MODULUS


	def __post_init__ (self) -> None:

		"""Validate the modulus and span and freeze the data as a tuple."""

		if self.modulus <= 0:
			raise ValueError(f"PitchSet modulus must be positive, got {self.modulus}")

		if self.span <= 0:
			raise ValueError(f"PitchSet span must be positive, got {self.span}")

		if not isinstance(self.data, tuple):
			object.__setattr__(self, "data", tuple(self.data))


	@classmethod
	def from_notes (cls, notes: typing.Iterable[int], modulus: int = DEFAULT_MODULUS) -> "PitchSet":

		"""Build a set from sounding notes: duplicates removed, sorted low to high.

		Parameters:
			notes: Absolute pitches in any order.
			modulus: Steps per octave (also used as the span).

		Returns:
			A new ``PitchSet`` whose first element is the lowest note.
		"""

		return cls(data=tuple(sorted(set(notes))), modulus=modulus, span=modulus)


	def __len__ (self) -> int:

		return len(self.data)


	def __iter__ (self) -> typing.Iterator[int]:

		return iter(self.data)


	def __getitem__ (self, index: int) -> int:

		return self.data[index]


	def pitch_class (self, pitch: int) -> int:

		"""Reduce a pitch to its class under this set's modulus."""

		return pitch % self.modulus


	def pitch_classes (self) -> typing.List[int]:

		"""Return the pitch class of every element, in stored order."""

		return [p % self.modulus for p in self.data]


	def bass (self) -> typing.Optional[int]:

		"""Return the lowest absolute pitch, or ``None`` for an empty set."""

		if not self.data:
			return None

		return min(self.data)


	def normalize (self) -> "PitchSet":

		"""Reduce to one octave of distinct pitch classes.

		The classes are ordered ascending starting from the class of the
		lowest absolute pitch, so index 0 of the result is always the bass.
		An empty set normalizes to an empty set.

		Example:
			```python
			PitchSet.from_notes([60, 64, 67, 76]).normalize().data  # (0, 4, 7)
			PitchSet((4, 7, 12)).normalize().data                   # (4, 7, 0)
			```
		"""

		if not self.data:
			return dataclasses.replace(self, data=())

		base = self.bass() % self.modulus  # type: ignore[operator]
		classes = sorted(set(self.pitch_classes()), key=lambda pc: (pc - base) % self.modulus)

		return dataclasses.replace(self, data=tuple(classes))


	def rotate (self, pivot_index: int, translate: bool = False) -> "PitchSet":

		"""Return a new set that starts at ``pivot_index`` and wraps around.

		Parameters:
			pivot_index: Element that becomes index 0 (taken modulo the length).
			translate: When True, elements that wrapped from the front are
				lifted by one span so the result stays ascending in pitch.

		Example:
			```python
			PitchSet((0, 4, 7)).rotate(1).data                  # (4, 7, 0)
			PitchSet((0, 4, 7)).rotate(1, translate=True).data  # (4, 7, 12)
			```
		"""

		n = len(self.data)

		if n == 0:
			return self

		pivot = pivot_index % n
		head = self.data[pivot:]
		tail = self.data[:pivot]

		if translate:
			tail = tuple(p + self.span for p in tail)

		return dataclasses.replace(self, data=head + tail)


	def element_at (self, index: int) -> int:

		"""Cyclic access that adds one span for each full pass over the set.

		``element_at(len(set) + 1)`` is the second element one span higher;
		negative indices step down in the same way.

		Raises:
			IndexError: If the set is empty.
		"""

		n = len(self.data)

		if n == 0:
			raise IndexError("element_at() on an empty PitchSet")

		return self.data[index % n] + self.span * (index // n)


	def index_of (self, pitch_class: int) -> int:

		"""Return the index of the first element with the given pitch class.

		Raises:
			ValueError: If no element has that pitch class.
		"""

		target = pitch_class % self.modulus

		for i, pitch in enumerate(self.data):
			if pitch % self.modulus == target:
				return i

		raise ValueError(f"Pitch class {target} is not in {self.data}")


	def intervals_from (self, reference: int) -> typing.List[int]:

		"""Return each element's interval above ``reference``, reduced mod the modulus."""

		return [(p - reference) % self.modulus for p in self.data]
