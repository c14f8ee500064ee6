"""WebSocket front end for the analysis engine.

Clients send JSON request envelopes::

	{"activePitches": [60, 64, 67], "selectedOptionIndex": 0,
	 "forceBassAsRoot": false, "preferSimpleSpelling": true, "requestId": 7}

and receive the response envelope for each, tagged with the same
``requestId`` (see ``AnalysisResult.to_dict``). A message that is not a valid
request is answered with ``{"error": "...", "requestId": ...}`` and the
connection stays open.

``broadcast()`` pushes a result to every connected client; ``serve`` uses it
to publish the analyses of the live MIDI session.
"""

import asyncio
import json
import logging
import typing

import websockets.asyncio.server
import websockets.exceptions

import chordscope.analysis


logger = logging.getLogger(__name__)


class AnalysisServer:

	"""Answer analysis requests over WebSockets."""

	def __init__ (
		self,
		analyzer: typing.Optional[chordscope.analysis.HarmonicAnalyzer] = None,
		host: str = "127.0.0.1",
		port: int = 8765
	) -> None:

		self.analyzer = analyzer if analyzer is not None else chordscope.analysis.HarmonicAnalyzer()
		self.host = host
		self.port = port
		self._server: typing.Optional[websockets.asyncio.server.Server] = None
		self._clients: typing.Set[websockets.asyncio.server.ServerConnection] = set()


	async def start (self) -> None:

		"""Start listening. With ``port=0`` the bound port is stored in ``self.port``."""

		self._server = await websockets.asyncio.server.serve(self._handle_client, self.host, self.port)

		for sock in self._server.sockets:
			self.port = sock.getsockname()[1]
			break

		logger.info(f"Analysis server listening on ws://{self.host}:{self.port}")


	async def stop (self) -> None:

		if self._server is None:
			return

		self._server.close()
		await self._server.wait_closed()
		self._server = None

		logger.info("Analysis server stopped")


	@property
	def client_count (self) -> int:

		return len(self._clients)


	def broadcast (self, result: chordscope.analysis.AnalysisResult) -> None:

		"""Send a result to every connected client."""

		if not self._clients:
			return

		websockets.asyncio.server.broadcast(self._clients, json.dumps(result.to_dict()))


	async def _handle_client (self, websocket: websockets.asyncio.server.ServerConnection) -> None:

		self._clients.add(websocket)

		try:
			async for message in websocket:
				reply = await self.respond(message)
				await websocket.send(json.dumps(reply))

		except websockets.exceptions.ConnectionClosed:
			pass

		finally:
			self._clients.discard(websocket)


	async def respond (self, message: typing.Union[str, bytes]) -> typing.Dict[str, typing.Any]:

		"""Turn one raw message into a response (or error) envelope."""

		request_id: typing.Any = None

		try:
			envelope = json.loads(message)

			if not isinstance(envelope, dict):
				raise ValueError("Request must be a JSON object")

			request_id = envelope.get("requestId")
			request = chordscope.analysis.AnalysisRequest.from_dict(envelope)

		except (ValueError, TypeError) as e:
			logger.warning(f"Rejected analysis request: {e}")
			return {"error": str(e), "requestId": request_id}

		result = await asyncio.to_thread(self.analyzer.analyze, request)

		return result.to_dict()
