"""Map theoretical note roles onto display buckets.

Presentation layers colour notes by five families - root, third, fifth,
seventh and extensions (with the specific extension named). The mapping is
mostly one-to-one, with two context-dependent cases:

- ``2`` and ``4`` are the chord's third only when the chord is suspended
  (``Sus 2`` / ``Sus 4``); next to a real third they are the 9th and 11th.
- ``6`` fills the seventh slot of a sixth chord; once a true seventh exists
  it is the 13th.
"""

import dataclasses
import typing

import chordscope.identifier
import chordscope.roles


ROLE_TO_DISPLAY: typing.Dict[chordscope.roles.NoteRole, chordscope.roles.DisplayRole] = {
	chordscope.roles.NoteRole.ROOT: chordscope.roles.DisplayRole.ROOT,
	chordscope.roles.NoteRole.MINOR_SECOND: chordscope.roles.DisplayRole.FLAT_NINTH,
	chordscope.roles.NoteRole.SECOND: chordscope.roles.DisplayRole.NINTH,
	chordscope.roles.NoteRole.AUGMENTED_SECOND: chordscope.roles.DisplayRole.SHARP_NINTH,
	chordscope.roles.NoteRole.MINOR_THIRD: chordscope.roles.DisplayRole.THIRD,
	chordscope.roles.NoteRole.MAJOR_THIRD: chordscope.roles.DisplayRole.THIRD,
	chordscope.roles.NoteRole.FOURTH: chordscope.roles.DisplayRole.ELEVENTH,
	chordscope.roles.NoteRole.AUGMENTED_FOURTH: chordscope.roles.DisplayRole.SHARP_ELEVENTH,
	chordscope.roles.NoteRole.DIMINISHED_FIFTH: chordscope.roles.DisplayRole.FIFTH,
	chordscope.roles.NoteRole.FIFTH: chordscope.roles.DisplayRole.FIFTH,
	chordscope.roles.NoteRole.AUGMENTED_FIFTH: chordscope.roles.DisplayRole.FIFTH,
	chordscope.roles.NoteRole.MINOR_SIXTH: chordscope.roles.DisplayRole.FLAT_THIRTEENTH,
	chordscope.roles.NoteRole.SIXTH: chordscope.roles.DisplayRole.THIRTEENTH,
	chordscope.roles.NoteRole.AUGMENTED_SIXTH: chordscope.roles.DisplayRole.SHARP_THIRTEENTH,
	chordscope.roles.NoteRole.DIMINISHED_SEVENTH: chordscope.roles.DisplayRole.SEVENTH,
	chordscope.roles.NoteRole.MINOR_SEVENTH: chordscope.roles.DisplayRole.SEVENTH,
	chordscope.roles.NoteRole.MAJOR_SEVENTH: chordscope.roles.DisplayRole.SEVENTH,
	chordscope.roles.NoteRole.UNCLASSIFIED: chordscope.roles.DisplayRole.EXTENSION,
}


@dataclasses.dataclass(frozen=True)
class ActivationFlags:

	"""Which chord functions are sounding."""

	root_active: bool = False
	third_active: bool = False
	fifth_active: bool = False
	seventh_active: bool = False


	def to_dict (self) -> typing.Dict[str, bool]:

		return {
			"rootActive": self.root_active,
			"thirdActive": self.third_active,
			"fifthActive": self.fifth_active,
			"seventhActive": self.seventh_active,
		}


def display_role (
	role: chordscope.roles.NoteRole,
	quality: chordscope.identifier.DetailedQuality
) -> chordscope.roles.DisplayRole:

	"""Return the display bucket for one theoretical role."""

	if role == chordscope.roles.NoteRole.SECOND and quality.third_quality == chordscope.roles.ThirdQuality.SUS2:
		return chordscope.roles.DisplayRole.THIRD

	if role == chordscope.roles.NoteRole.FOURTH and quality.third_quality == chordscope.roles.ThirdQuality.SUS4:
		return chordscope.roles.DisplayRole.THIRD

	if role == chordscope.roles.NoteRole.SIXTH and quality.seventh_quality == chordscope.roles.SeventhQuality.SIXTH:
		return chordscope.roles.DisplayRole.SEVENTH

	return ROLE_TO_DISPLAY.get(role, chordscope.roles.DisplayRole.EXTENSION)


def map_display_roles (
	roles: typing.Mapping[int, chordscope.roles.NoteRole],
	quality: chordscope.identifier.DetailedQuality
) -> typing.Tuple[typing.Dict[int, chordscope.roles.DisplayRole], ActivationFlags]:

	"""Map a role table to display roles and compute the activation flags.

	Parameters:
		roles: Any key (pitch class or absolute pitch) -> theoretical role.
		quality: The detailed quality of the same chord option.

	Returns:
		``(display_roles, flags)`` with ``display_roles`` keyed like ``roles``.
	"""

	mapped = {key: display_role(role, quality) for key, role in roles.items()}
	present = set(mapped.values())

	flags = ActivationFlags(
		root_active = chordscope.roles.DisplayRole.ROOT in present,
		third_active = chordscope.roles.DisplayRole.THIRD in present,
		fifth_active = chordscope.roles.DisplayRole.FIFTH in present,
		seventh_active = chordscope.roles.DisplayRole.SEVENTH in present
	)

	return mapped, flags
