"""Chord-symbol notation preferences.

Chord names come out of ``chordscope.identifier`` in one house style
(``Cmaj7``, ``Dmin7``, ``Bø``, ``Adim7``, ``E(omit3)``, Unicode accidentals).
``format_chord_name()`` rewrites them for the conventions a reader prefers:
``∆`` or ``maj``, ``-``/``m``/``min``, ``°`` or ``dim``, ``+`` or ``aug``,
``ø`` or the spelled-out ``-7♭5``, ``omit`` or ``no``, ``♭``/``♯`` or
``b``/``#``.

Example:
	```python
	settings = ChordNotationSettings(major="∆", minor="-", accidental="b")
	format_chord_name("E♭min7(♭9)", settings)   # "Eb-7(b9)"
	format_chord_name("Cmaj7", settings)          # "C∆7"
	```
"""

import dataclasses
import re
import typing


NOTATION_CHOICES: typing.Dict[str, typing.Tuple[str, ...]] = {
	"major": ("maj", "∆"),
	"minor": ("min", "m", "-"),
	"diminished": ("dim", "°", "dynamic"),
	"augmented": ("aug", "+"),
	"half_diminished": ("ø", "dynamic"),
	"omit": ("omit", "no"),
	"accidental": ("b", "♭"),
}


@dataclasses.dataclass(frozen=True)
class ChordNotationSettings:

	"""How chord symbols should be written."""

	major: str = "∆"
	minor: str = "-"
	diminished: str = "°"
	augmented: str = "+"
	half_diminished: str = "ø"
	omit: str = "omit"
	accidental: str = "♭"


	def __post_init__ (self) -> None:

		"""Reject values outside ``NOTATION_CHOICES``."""

		for field_name, choices in NOTATION_CHOICES.items():

			value = getattr(self, field_name)

			if value not in choices:
				raise ValueError(
					f"Unknown {field_name} notation {value!r}. Expected one of {list(choices)}"
				)


	@classmethod
	def from_dict (cls, values: typing.Optional[typing.Mapping[str, typing.Any]]) -> "ChordNotationSettings":

		"""Build settings from a config mapping, ignoring unknown keys."""

		if not values:
			return cls()

		known = {k: str(v) for k, v in values.items() if k in NOTATION_CHOICES}

		return cls(**known)


	@property
	def sharp (self) -> str:

		return "♯" if self.accidental == "♭" else "#"


HOUSE_STYLE: ChordNotationSettings = ChordNotationSettings(
	major = "maj",
	minor = "min",
	diminished = "dim",
	augmented = "aug",
	half_diminished = "ø",
	omit = "omit",
	accidental = "♭"
)


def format_chord_name (name: str, settings: ChordNotationSettings) -> str:

	"""Rewrite a house-style chord name according to ``settings``.

	Only the quality tokens and accidentals change; letters and extension
	numbers are kept. A fully diminished seventh with ``diminished="dynamic"``
	is written ``°7``, since the spelled-out form only exists for the triad.
	"""

	flat = settings.accidental
	sharp = settings.sharp

	formatted = name.replace("♭", flat).replace("♯", sharp)

	# Placeholders keep replacements from matching each other's output.
	formatted = formatted.replace("minmaj7", "\x00MIN\x00\x00MAJ\x007")
	formatted = formatted.replace("dimmaj7", "\x00DIM\x00\x00MAJ\x007")
	formatted = formatted.replace("maj", "\x00MAJ\x00")
	formatted = formatted.replace("min", "\x00MIN\x00")
	formatted = formatted.replace("aug", "\x00AUG\x00")
	formatted = formatted.replace("dim7", "\x00DIM7\x00")
	formatted = formatted.replace("dim", "\x00DIM\x00")
	formatted = formatted.replace("ø", "\x00HALF\x00")
	formatted = formatted.replace("omit", "\x00OMIT\x00")

	if settings.diminished == "dynamic":
		diminished = f"{settings.minor}{flat}5"
		diminished_seventh = "°7"
	else:
		diminished = settings.diminished
		diminished_seventh = f"{settings.diminished}7"

	if settings.half_diminished == "dynamic":
		half_diminished = f"{settings.minor}7{flat}5"
	else:
		half_diminished = settings.half_diminished

	replacements = {
		"MAJ": settings.major,
		"MIN": settings.minor,
		"AUG": settings.augmented,
		"DIM7": diminished_seventh,
		"DIM": diminished,
		"HALF": half_diminished,
		"OMIT": settings.omit,
	}

	return re.sub(r"\x00([A-Z0-9]+)\x00", lambda m: replacements[m.group(1)], formatted)
