"""Live MIDI input for an analysis session.

mido delivers input messages on its own callback thread. ``MidiInput``
forwards each one to the asyncio loop with ``call_soon_threadsafe`` and
applies it to the ``AnalysisSession`` from a task on the loop, so the session
is only ever touched from one thread.
"""

import asyncio
import logging
import typing

import chordscope.midi_utils
import chordscope.session


logger = logging.getLogger(__name__)


class MidiInput:

	"""Feeds a MIDI input port into an ``AnalysisSession``."""

	def __init__ (
		self,
		session: chordscope.session.AnalysisSession,
		device_name: typing.Optional[str] = None
	) -> None:

		self.session = session
		self.device_name = device_name
		self.midi_in: typing.Optional[typing.Any] = None
		self.running = False
		self.task: typing.Optional[asyncio.Task] = None
		self._queue: typing.Optional[asyncio.Queue] = None
		self._loop: typing.Optional[asyncio.AbstractEventLoop] = None


	async def start (self) -> bool:

		"""Open the input port and start applying messages.

		Returns False (and stays stopped) when no port could be opened.
		"""

		if self.running:
			return True

		# Capture the loop before opening the port so early callbacks have somewhere to go.
		self._loop = asyncio.get_running_loop()
		self._queue = asyncio.Queue()

		device_name, midi_in = chordscope.midi_utils.select_input_device(self.device_name, self._on_midi_input)

		if midi_in is None:
			logger.warning("MIDI input disabled - no device could be opened")
			self._queue = None
			self._loop = None
			return False

		self.device_name = device_name
		self.midi_in = midi_in
		self.running = True
		self.task = asyncio.create_task(self._run())

		return True


	async def stop (self) -> None:

		if not self.running:
			return

		self.running = False

		if self.task:
			self.task.cancel()
			try:
				await self.task
			except asyncio.CancelledError:
				pass
			self.task = None

		if self.midi_in is not None:
			self.midi_in.close()
			self.midi_in = None

		self._queue = None
		self._loop = None

		logger.info("MIDI input stopped")


	def _on_midi_input (self, message: typing.Any) -> None:

		"""Runs on mido's callback thread."""

		if self._queue is None or self._loop is None:
			return

		self._loop.call_soon_threadsafe(self._queue.put_nowait, message)


	async def _run (self) -> None:

		assert self._queue is not None, "MIDI input queue must be initialized before running"

		while self.running:

			message = await self._queue.get()

			if not self.session.apply_message(message):
				logger.debug(f"Ignoring MIDI message: {message}")
