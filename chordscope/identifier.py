"""Chord identification.

``identify()`` reads a set of pitch classes as a chord. Every pitch class
present is tried as the root (or only the bass, in bass-as-root mode). For
each candidate the intervals above the root are classified by
``chordscope.intervals.classify_intervals()``, the reading is scored, and a
``ChordOption`` is built with its name, per-note roles and quality breakdown.
All options are returned, best first, so a caller can offer the alternatives.

Scoring is a weighted sum (``SCORE_WEIGHTS``) that rewards a real third, a
fifth, a seventh, a complete triad and a root in the bass, and penalises each
extension or unclassified note. Equal scores keep the order of the input set,
whose first element is the bass.

Example:
	```python
	chord = PitchSet.from_notes([60, 64, 67, 71]).normalize()
	options = identify(chord)
	options[0].display_name   # "Cmaj7"
	options[1].display_name   # "Emin(add♭13)/C"
	```
"""

import dataclasses
import logging
import types
import typing

import chordscope.intervals
import chordscope.pitch_set
import chordscope.roles
import chordscope.spelling


logger = logging.getLogger(__name__)


SCORE_WEIGHTS: typing.Dict[str, float] = {
	"third": 40.0,
	"suspended_third": 20.0,
	"perfect_fifth": 20.0,
	"altered_fifth": 10.0,
	"seventh": 10.0,
	"sixth": 5.0,
	"complete_triad": 10.0,
	"root_in_bass": 15.0,
	"extension": -8.0,
	"unclassified": -20.0,
}


@dataclasses.dataclass(frozen=True)
class DetailedQuality:

	"""Quality of each chord slot plus the extension labels."""

	third_quality: chordscope.roles.ThirdQuality
	fifth_quality: chordscope.roles.FifthQuality
	seventh_quality: chordscope.roles.SeventhQuality
	extensions: typing.Tuple[str, ...] = ()


	def to_dict (self) -> typing.Dict[str, typing.Any]:

		return {
			"thirdQuality": self.third_quality.value,
			"fifthQuality": self.fifth_quality.value,
			"seventhQuality": self.seventh_quality.value,
			"extensions": list(self.extensions),
		}


@dataclasses.dataclass(frozen=True)
class ChordOption:

	"""One reading of a pitch-class set as a chord.

	Attributes:
		root: Root pitch class.
		display_name: Full chord symbol, e.g. ``"Cmin7(11)/E♭"``.
		root_name: Spelled root, e.g. ``"E♭"``.
		base: Base quality token (``""``, ``"min"``, ``"maj7"``, ``"dim7"``,
			``"ø"``, ``"7sus4"``, ``"5"``, ...). A plain major triad is ``""``.
		extensions: Tokens written after the base, e.g. ``("♭5", "9")``.
		inversion: Spelled bass note when it differs from the root.
		roles: Pitch class -> theoretical role, one entry per input class.
		detailed_quality: Slot qualities and extension labels.
		score: Ranking score (higher is better).
	"""

	root: int
	display_name: str
	root_name: str
	base: str
	extensions: typing.Tuple[str, ...]
	inversion: typing.Optional[str]
	roles: typing.Mapping[int, chordscope.roles.NoteRole]
	detailed_quality: DetailedQuality
	score: float = 0.0


	def __post_init__ (self) -> None:

		object.__setattr__(self, "roles", types.MappingProxyType(dict(self.roles)))


	def to_dict (self) -> typing.Dict[str, typing.Any]:

		"""Serialise to the camelCase option envelope."""

		return {
			"displayName": self.display_name,
			"rootDisplayName": self.root_name,
			"baseQualityToken": self.base,
			"extensionTokens": list(self.extensions),
			"inversionSuffix": self.inversion,
			"perNoteRole": {str(pc): role.value for pc, role in self.roles.items()},
			"detailedQuality": self.detailed_quality.to_dict(),
		}


def identify (
	pitch_set: chordscope.pitch_set.PitchSet,
	bass_as_root: bool = False,
	prefer_simple_spelling: bool = True
) -> typing.List[ChordOption]:

	"""Return every chord reading of a pitch set, best first.

	A set already in pitch-class form (every element below the modulus, as
	``PitchSet.normalize()`` returns) is read with its first element as the
	bass. A set holding absolute pitches is normalized first, so its lowest
	note is the bass whatever the stored order.

	Parameters:
		pitch_set: Notes to analyse. Only pitch classes matter; repeated
			classes are ignored.
		bass_as_root: Force the bass to be the root (a single option).
		prefer_simple_spelling: Passed to the spelling resolver for the
			root and slash-bass names.

	Returns:
		Ranked ``ChordOption`` list; empty for an empty set.
	"""

	if any(not 0 <= p < pitch_set.modulus for p in pitch_set):
		pitch_set = pitch_set.normalize()

	classes = _distinct_classes(pitch_set)

	if not classes:
		return []

	reference = chordscope.pitch_set.PitchSet(
		data = tuple(classes),
		modulus = pitch_set.modulus,
		span = pitch_set.span
	)

	bass = classes[0]
	candidates = [0] if bass_as_root else list(range(len(classes)))

	options = [
		_build_option(reference, index, bass, prefer_simple_spelling)
		for index in candidates
	]

	ranked = sorted(options, key=lambda option: -option.score)

	logger.debug(f"Identified {len(ranked)} option(s) for {classes}: {ranked[0].display_name}")

	return ranked


def score_analysis (analysis: chordscope.intervals.IntervalAnalysis, root_in_bass: bool) -> float:

	"""Score one candidate reading using ``SCORE_WEIGHTS``."""

	weights = SCORE_WEIGHTS
	score = 0.0

	if analysis.third in (chordscope.roles.ThirdQuality.MAJOR, chordscope.roles.ThirdQuality.MINOR):
		score += weights["third"]
	elif analysis.third in (chordscope.roles.ThirdQuality.SUS2, chordscope.roles.ThirdQuality.SUS4):
		score += weights["suspended_third"]

	if analysis.fifth == chordscope.roles.FifthQuality.PERFECT:
		score += weights["perfect_fifth"]
	elif analysis.fifth in (chordscope.roles.FifthQuality.DIMINISHED, chordscope.roles.FifthQuality.AUGMENTED):
		score += weights["altered_fifth"]

	if analysis.has_true_seventh():
		score += weights["seventh"]
	elif analysis.seventh == chordscope.roles.SeventhQuality.SIXTH:
		score += weights["sixth"]

	has_third = analysis.third in (chordscope.roles.ThirdQuality.MAJOR, chordscope.roles.ThirdQuality.MINOR)
	has_fifth = analysis.fifth not in (chordscope.roles.FifthQuality.OMITTED, chordscope.roles.FifthQuality.NONE)

	if has_third and has_fifth:
		score += weights["complete_triad"]

	if root_in_bass:
		score += weights["root_in_bass"]

	score += weights["extension"] * len(analysis.extensions)
	score += weights["unclassified"] * analysis.unclassified_count()

	return score


def base_token (
	third: chordscope.roles.ThirdQuality,
	fifth: chordscope.roles.FifthQuality,
	seventh: chordscope.roles.SeventhQuality,
	has_extensions: bool = False
) -> typing.Tuple[str, typing.List[str]]:

	"""Return the base quality token and any modifier tokens for a chord.

	Modifiers are written before the extensions: ``"♭5"`` / ``"♯5"`` for an
	altered fifth the base does not already imply, ``"omit3"`` when the
	third is missing.

	Example:
		```python
		base_token(ThirdQuality.MINOR, FifthQuality.DIMINISHED, SeventhQuality.MINOR)
		# ("ø", [])
		base_token(ThirdQuality.MAJOR, FifthQuality.DIMINISHED, SeventhQuality.MINOR)
		# ("7", ["♭5"])
		```
	"""

	Third = chordscope.roles.ThirdQuality
	Fifth = chordscope.roles.FifthQuality
	Seventh = chordscope.roles.SeventhQuality

	seventh_suffix = {
		Seventh.MAJOR: "maj7",
		Seventh.MINOR: "7",
		Seventh.SIXTH: "6",
		Seventh.DIMINISHED: "7",
	}.get(seventh, "")

	modifiers: typing.List[str] = []

	if third == Third.NONE:
		return "", modifiers

	if third == Third.MINOR:

		if fifth == Fifth.DIMINISHED:
			if seventh == Seventh.MINOR:
				return "ø", modifiers
			if seventh == Seventh.DIMINISHED:
				return "dim7", modifiers
			if seventh == Seventh.MAJOR:
				return "dimmaj7", modifiers
			return "dim", modifiers

		if seventh == Seventh.MAJOR:
			return "minmaj7", modifiers

		return "min" + seventh_suffix, modifiers

	if third == Third.MAJOR:

		if fifth == Fifth.AUGMENTED:
			return "aug" + seventh_suffix, modifiers

		if fifth == Fifth.DIMINISHED:
			modifiers.append("♭5")

		return seventh_suffix, modifiers

	if fifth == Fifth.DIMINISHED:
		modifiers.append("♭5")
	elif fifth == Fifth.AUGMENTED:
		modifiers.append("♯5")

	if third in (Third.SUS2, Third.SUS4):
		suspension = "sus2" if third == Third.SUS2 else "sus4"
		return seventh_suffix + suspension, modifiers

	# No third at all: a bare fifth is a power chord, anything else says omit3.
	if fifth == Fifth.PERFECT and seventh == Seventh.OMITTED and not has_extensions:
		return "5", modifiers

	modifiers.append("omit3")

	return seventh_suffix, modifiers


def compose_name (
	root_name: str,
	base: str,
	tokens: typing.Sequence[str],
	inversion: typing.Optional[str]
) -> str:

	"""Join the parts of a chord symbol: ``root base(tokens)/bass``."""

	name = root_name + base

	if tokens:
		name += "(" + ",".join(tokens) + ")"

	if inversion:
		name += "/" + inversion

	return name


def _distinct_classes (pitch_set: chordscope.pitch_set.PitchSet) -> typing.List[int]:

	"""Pitch classes in stored order with repeats dropped."""

	seen: typing.Set[int] = set()
	classes: typing.List[int] = []

	for pc in pitch_set.pitch_classes():
		if pc not in seen:
			seen.add(pc)
			classes.append(pc)

	return classes


def _build_option (
	reference: chordscope.pitch_set.PitchSet,
	root_index: int,
	bass: int,
	prefer_simple_spelling: bool
) -> ChordOption:

	"""Classify, score and name the reading rooted at ``reference[root_index]``."""

	root = reference[root_index]
	modulus = reference.modulus

	analysis = chordscope.intervals.classify_intervals(reference.intervals_from(root), modulus)
	score = score_analysis(analysis, root_in_bass=(root == bass))

	roles = {pc: analysis.roles[(pc - root) % modulus] for pc in reference}

	if modulus == 12:
		names = chordscope.spelling.spell_map(reference.rotate(root_index), 0, prefer_simple_spelling)
	else:
		names = {pc: str(pc) for pc in reference}

	root_name = names[root]
	inversion = names[bass] if bass != root else None

	base, modifiers = base_token(analysis.third, analysis.fifth, analysis.seventh, bool(analysis.extensions))
	tokens = tuple(modifiers) + analysis.extensions

	return ChordOption(
		root = root,
		display_name = compose_name(root_name, base, tokens, inversion),
		root_name = root_name,
		base = base,
		extensions = tokens,
		inversion = inversion,
		roles = roles,
		detailed_quality = DetailedQuality(
			third_quality = analysis.third,
			fifth_quality = analysis.fifth,
			seventh_quality = analysis.seventh,
			extensions = analysis.extensions
		),
		score = score
	)
