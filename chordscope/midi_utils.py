import logging
import typing

import mido


logger = logging.getLogger(__name__)


CONCERT_A_PITCH: int = 69
CONCERT_A_HZ: float = 440.0


def select_input_device (
	device_name: typing.Optional[str] = None,
	callback: typing.Optional[typing.Callable] = None
) -> typing.Tuple[typing.Optional[str], typing.Optional[typing.Any]]:

	"""
	Select and open a MIDI input device.

	If `device_name` is None, the first available input is used. If the
	precise name is not found, falls back to the first available input and
	logs a warning, which keeps config files portable between machines.

	Returns:
		A tuple of (device_name, midi_in_object) or (None, None) on failure.
	"""

	try:
		inputs = mido.get_input_names()
		logger.info(f"Available MIDI inputs: {inputs}")

		if not inputs:
			logger.error("No MIDI input devices found.")
			return None, None

		target = device_name

		if target is None:
			target = inputs[0]
			logger.info(f"No MIDI input named - using '{target}'")

		elif target not in inputs:
			logger.warning(f"MIDI input device '{target}' not found.")
			target = inputs[0]
			logger.warning(f"Fallback to: {target}")

		midi_in = mido.open_input(target, callback=callback)
		logger.info(f"Opened MIDI input: {target}")
		return target, midi_in

	except Exception as e:
		logger.error(f"Failed to open MIDI input: {e}")
		return None, None


def pitch_to_frequency (pitch: float) -> float:

	"""Equal-tempered frequency in Hz of a MIDI pitch (A4 = 69 = 440 Hz)."""

	return CONCERT_A_HZ * (2.0 ** ((pitch - CONCERT_A_PITCH) / 12.0))
