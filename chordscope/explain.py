"""Plain-language explanations of chord intervals.

``explain_interval()`` says what an interval is doing in a particular
chord. The same semitone distance reads differently depending on its
neighbours: 3 semitones is the minor third of a minor chord but the ♯9 of a
dominant that already has a major third; 9 semitones is a sixth, a 13th or a
diminished seventh.

Example:
	```python
	explain_interval(3, [0, 4, 7, 10]).title    # "Augmented Ninth (♯9)"
	explain_interval(9, [0, 3, 6]).title        # "Diminished Seventh (𝄫7)"
	```
"""

import dataclasses
import typing


@dataclasses.dataclass(frozen=True)
class Explanation:

	title: str
	description: str


EXPLANATIONS: typing.Dict[str, Explanation] = {
	"root": Explanation("Root (R)", "The note the chord is built on. Every other interval is measured from it."),
	"b9_dom": Explanation("Minor Ninth (♭9)", "Altered tension on a dominant chord, pulling down a semitone towards the fifth of the next chord."),
	"b9_dim": Explanation("Minor Ninth (♭9)", "Part of the symmetrical diminished sound; a diminished chord often acts as a rootless dominant ♭9."),
	"b2_phryg": Explanation("Minor Second (♭2)", "Phrygian colour: a dark half step above the root rather than a tension that must resolve."),
	"sus2": Explanation("Suspended Second (sus2)", "Replaces the third, leaving the chord neither major nor minor."),
	"maj9": Explanation("Major Ninth (9)", "Natural extension above a seventh chord. Adds colour without changing the function."),
	"add9": Explanation("Added Ninth (add9)", "A ninth on a chord without a seventh. Soft and open."),
	"min3": Explanation("Minor Third (♭3)", "Defines the minor quality of the chord."),
	"sharp9": Explanation("Augmented Ninth (♯9)", "Sounds against a major third; the blues tension of the 7♯9 chord."),
	"maj3": Explanation("Major Third (3)", "Defines the major quality of the chord."),
	"sus4": Explanation("Suspended Fourth (sus4)", "Replaces the third and usually resolves down to it."),
	"p4_avoid": Explanation("Perfect Fourth (avoid note)", "Clashes a half step above the major third of a triad; usually raised to ♯11 or left out."),
	"p11_dom": Explanation("Eleventh (11)", "Over a major third and a seventh, the natural 11 tends to blur the third; common in suspended voicings."),
	"p11_min": Explanation("Eleventh (11)", "Sits comfortably on minor chords; the Dorian sound."),
	"dim5_7b5": Explanation("Diminished Fifth (♭5)", "The lowered fifth of a half-diminished or 7♭5 chord."),
	"dim5_dim": Explanation("Diminished Fifth (♭5)", "With the minor third it forms the diminished triad."),
	"sharp11_lyd": Explanation("Augmented Eleventh (♯11)", "Lydian colour over a major chord, avoiding the clash of the natural 4th."),
	"tritone": Explanation("Tritone", "Half an octave above the root; unstable and ambiguous without a third."),
	"perf5": Explanation("Perfect Fifth (5)", "Reinforces the root. Alone with the root it makes a power chord."),
	"aug5": Explanation("Augmented Fifth (♯5)", "Raised fifth of the augmented chord, pushing upwards."),
	"b13_dom": Explanation("Minor Thirteenth (♭13)", "Altered tension on a dominant chord, often paired with the ♭9."),
	"b6_min": Explanation("Minor Sixth (♭6)", "Aeolian or harmonic-minor colour."),
	"dim7": Explanation("Diminished Seventh (𝄫7)", "Spelled as a doubly flattened seventh, it completes the fully diminished chord."),
	"maj13": Explanation("Thirteenth (13)", "The sixth above a seventh chord, counted as an extension."),
	"maj6": Explanation("Major Sixth (6)", "Takes the place of the seventh in a sixth chord."),
	"min7_dom": Explanation("Minor Seventh (♭7)", "With the major third it forms the tritone that drives a dominant chord."),
	"min7_min": Explanation("Minor Seventh (♭7)", "Softens a minor triad into a minor seventh chord."),
	"min7_gen": Explanation("Minor Seventh (♭7)", "A seventh without a defining third."),
	"dim_maj7": Explanation("Major Seventh (on minor)", "The minor-major seventh: tense and dark."),
	"maj7": Explanation("Major Seventh (maj7)", "A gentle dissonance against the root; a restful colour."),
	"unknown": Explanation("Interval", "No specific role in this voicing."),
}


def explanation_key (interval: int, context_intervals: typing.Iterable[int]) -> str:

	"""Choose the ``EXPLANATIONS`` key for an interval in a chord context.

	Parameters:
		interval: Semitones above the root (reduced modulo 12).
		context_intervals: Every interval present in the chord.
	"""

	context = {i % 12 for i in context_intervals}
	interval = interval % 12

	has_min3 = 3 in context
	has_maj3 = 4 in context
	has_dim5 = 6 in context
	has_p5 = 7 in context
	has_min7 = 10 in context
	has_maj7 = 11 in context

	if interval == 0:
		return "root"

	if interval == 1:
		if has_maj3 and has_min7:
			return "b9_dom"
		if has_min3 and not has_p5:
			return "b9_dim"
		return "b2_phryg"

	if interval == 2:
		if not has_min3 and not has_maj3 and 5 not in context:
			return "sus2"
		if has_min7 or has_maj7:
			return "maj9"
		return "add9"

	if interval == 3:
		return "sharp9" if has_maj3 else "min3"

	if interval == 4:
		return "maj3"

	if interval == 5:
		if not has_min3 and not has_maj3:
			return "sus4"
		if has_maj3 and (has_maj7 or has_min7):
			return "p11_dom"
		if has_maj3:
			return "p4_avoid"
		return "p11_min"

	if interval == 6:
		if has_min7 and not has_p5:
			return "dim5_7b5"
		if has_min3 and not has_p5:
			return "dim5_dim"
		if has_maj3 or has_maj7:
			return "sharp11_lyd"
		return "tritone"

	if interval == 7:
		return "perf5"

	if interval == 8:
		if has_maj3 and not has_p5:
			return "aug5"
		if has_maj3 and has_min7:
			return "b13_dom"
		return "b6_min"

	if interval == 9:
		if has_min3 and has_dim5 and not has_min7 and not has_maj7:
			return "dim7"
		if has_min7 or has_maj7:
			return "maj13"
		return "maj6"

	if interval == 10:
		if has_maj3:
			return "min7_dom"
		if has_min3:
			return "min7_min"
		return "min7_gen"

	if interval == 11:
		return "dim_maj7" if has_min3 and not has_maj3 else "maj7"

	return "unknown"


def explain_interval (interval: int, context_intervals: typing.Iterable[int]) -> Explanation:

	"""Return the explanation for an interval in the given chord context."""

	return EXPLANATIONS[explanation_key(interval, context_intervals)]
