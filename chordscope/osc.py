"""OSC integration for remote note input and analysis broadcasting.

The server listens on a UDP port (default 9000) for control messages that
drive an ``AnalysisSession`` and sends each analysis to a target host/port
(default 127.0.0.1:9001).

Built-in Receive Handlers
─────────────────────────
- ``/note/on <int>``: Sound a note
- ``/note/off <int>``: Release a note
- ``/select <int>``: Choose a ranked chord option
- ``/bass_as_root <0|1>``: Treat the lowest note as the root
- ``/simple_spelling <0|1>``: Prefer simple enharmonic spellings
- ``/reset``: Silence every note

Built-in Send Events
────────────────────
- ``/chord <string>``: Name of the selected chord (``--`` when none)
- ``/root <string>``: Spelled root
- ``/quality <string>``: Third quality (Major, Minor, Sus 4, ...)
- ``/extensions <string>...``: Extension tokens, one argument each
"""

import asyncio
import logging
import typing

import pythonosc.dispatcher
import pythonosc.osc_server
import pythonosc.udp_client

import chordscope.analysis
import chordscope.session


logger = logging.getLogger(__name__)


class OscServer:

	"""Async OSC server/client for bi-directional communication."""

	def __init__ (
		self,
		session: chordscope.session.AnalysisSession,
		receive_port: int = 9000,
		send_port: int = 9001,
		send_host: str = "127.0.0.1"
	) -> None:

		self._session = session
		self._receive_port = receive_port
		self._send_port = send_port
		self._send_host = send_host

		self._server: typing.Optional[typing.Any] = None
		self._transport: typing.Optional[asyncio.BaseTransport] = None
		self._client: typing.Optional[pythonosc.udp_client.SimpleUDPClient] = None
		self._dispatcher = pythonosc.dispatcher.Dispatcher()

		# Register built-in handlers
		self._dispatcher.map("/note/on", self._handle_note_on)
		self._dispatcher.map("/note/off", self._handle_note_off)
		self._dispatcher.map("/select", self._handle_select)
		self._dispatcher.map("/bass_as_root", self._handle_bass_as_root)
		self._dispatcher.map("/simple_spelling", self._handle_simple_spelling)
		self._dispatcher.map("/reset", self._handle_reset)


	@property
	def receive_port (self) -> int:

		"""The bound receive port (resolved after ``start()`` when 0 was requested)."""

		if self._transport is not None:
			return self._transport.get_extra_info("sockname")[1]

		return self._receive_port


	async def start (self) -> None:

		"""Start the OSC server and client."""

		# client for sending
		self._client = pythonosc.udp_client.SimpleUDPClient(self._send_host, self._send_port)

		# server for receiving
		self._server = pythonosc.osc_server.AsyncIOOSCUDPServer(
			("0.0.0.0", self._receive_port),
			self._dispatcher,
			asyncio.get_running_loop()  # type: ignore[arg-type]
		)

		transport, _ = await self._server.create_serve_endpoint()
		self._transport = transport

		logger.info(f"OSC listening on :{self.receive_port}, sending to {self._send_host}:{self._send_port}")


	async def stop (self) -> None:

		"""Stop the OSC server."""

		if self._transport:
			self._transport.close()
			self._transport = None
			logger.info("OSC server stopped")


	def send (self, address: str, *args: typing.Any) -> None:

		"""Send an OSC message."""

		if self._client:
			try:
				self._client.send_message(address, list(args))
			except Exception as e:
				logger.warning(f"OSC send error: {e}")


	def send_analysis (self, result: chordscope.analysis.AnalysisResult) -> None:

		"""Publish the selected chord of an analysis."""

		self.send("/chord", result.chord_name)
		self.send("/root", result.analysis.root_name)
		self.send("/quality", result.analysis.quality)
		self.send("/extensions", *result.analysis.extensions)


	# Handlers

	def _int_arg (self, address: str, args: typing.Tuple[typing.Any, ...]) -> typing.Optional[int]:
		if not args:
			return None
		try:
			return int(args[0])
		except (ValueError, TypeError):
			logger.warning(f"Invalid OSC argument for {address}: {args[0]}")
			return None

	def _handle_note_on (self, address: str, *args: typing.Any) -> None:
		pitch = self._int_arg(address, args)
		if pitch is not None:
			self._session.note_on(pitch)

	def _handle_note_off (self, address: str, *args: typing.Any) -> None:
		pitch = self._int_arg(address, args)
		if pitch is not None:
			self._session.note_off(pitch)

	def _handle_select (self, address: str, *args: typing.Any) -> None:
		index = self._int_arg(address, args)
		if index is None:
			return
		try:
			self._session.select_option(index)
		except ValueError as e:
			logger.warning(f"Invalid OSC option index: {e}")

	def _handle_bass_as_root (self, address: str, *args: typing.Any) -> None:
		value = self._int_arg(address, args)
		if value is not None:
			self._session.set_bass_as_root(bool(value))

	def _handle_simple_spelling (self, address: str, *args: typing.Any) -> None:
		value = self._int_arg(address, args)
		if value is not None:
			self._session.set_prefer_simple_spelling(bool(value))

	def _handle_reset (self, address: str, *args: typing.Any) -> None:
		self._session.reset()
