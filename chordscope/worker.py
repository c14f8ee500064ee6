"""Background analysis worker.

Analysis is requested far more often than it needs to be displayed - a
chord played with five fingers produces five note-on events in a few
milliseconds. The worker decouples the two sides with explicit channels:

- ``submit()`` tags a request with the next sequence number and puts it on
  the request queue. It never blocks.
- A background task takes requests one at a time, runs the analysis in a
  thread (``asyncio.to_thread``) so the event loop stays responsive, and
  puts each result on the response queue.
- ``next_result()`` hands back only the result for the most recently
  submitted request; anything older is stale and dropped.

There is no cancellation: each analysis is short, and a stale result is
simply ignored when it arrives.

Example:
	```python
	worker = AnalysisWorker()
	await worker.start()

	worker.submit(AnalysisRequest(active_pitches=(60,)))
	worker.submit(AnalysisRequest(active_pitches=(60, 64, 67)))

	result = await worker.next_result()   # the C major triad; the lone C is dropped
	await worker.stop()
	```
"""

import asyncio
import dataclasses
import logging
import typing

import chordscope.analysis


logger = logging.getLogger(__name__)


class AnalysisWorker:

	"""Request queue in, analysis in a thread, response queue out."""

	def __init__ (
		self,
		analyzer: typing.Optional[chordscope.analysis.HarmonicAnalyzer] = None,
		cache_size: int = chordscope.analysis.DEFAULT_CACHE_SIZE
	) -> None:

		self.analyzer = analyzer if analyzer is not None else chordscope.analysis.HarmonicAnalyzer(cache_size)
		self.latest_request_id = 0
		self.running = False
		self.task: typing.Optional[asyncio.Task] = None
		self._requests: typing.Optional[asyncio.Queue] = None
		self._responses: typing.Optional[asyncio.Queue] = None
		self._next_id = 0


	async def start (self) -> None:

		"""Create the channels and start the background task."""

		if self.running:
			return

		self._requests = asyncio.Queue()
		self._responses = asyncio.Queue()
		self.running = True
		self.task = asyncio.create_task(self._run())

		logger.info("Analysis worker started")


	async def stop (self) -> None:

		"""Finish the queued requests, then stop the background task."""

		if not self.running or self._requests is None:
			return

		self.running = False
		self._requests.put_nowait(None)

		if self.task:
			await self.task
			self.task = None

		logger.info("Analysis worker stopped")


	def submit (self, request: chordscope.analysis.AnalysisRequest) -> int:

		"""Queue a request and return the sequence number assigned to it.

		Raises:
			RuntimeError: If the worker has not been started.
		"""

		if not self.running or self._requests is None:
			raise RuntimeError("AnalysisWorker.submit() called before start()")

		self._next_id += 1
		request_id = self._next_id

		self.latest_request_id = request_id
		self._requests.put_nowait(dataclasses.replace(request, request_id=request_id))

		return request_id


	def is_current (self, result: chordscope.analysis.AnalysisResult) -> bool:

		"""True when ``result`` answers the most recent request."""

		return result.request_id == self.latest_request_id


	async def next_result (self) -> chordscope.analysis.AnalysisResult:

		"""Wait for the result of the latest request, discarding stale ones."""

		if self._responses is None:
			raise RuntimeError("AnalysisWorker.next_result() called before start()")

		while True:

			result = await self._responses.get()

			if self.is_current(result):
				return result

			logger.debug(f"Discarding stale analysis {result.request_id} (latest {self.latest_request_id})")


	async def _run (self) -> None:

		"""Process requests until the stop sentinel arrives."""

		assert self._requests is not None and self._responses is not None

		while True:

			request = await self._requests.get()

			if request is None:
				break

			try:
				result = await asyncio.to_thread(self.analyzer.analyze, request)

			except Exception:
				logger.exception(f"Analysis worker failed on request {request.request_id}")
				result = chordscope.analysis.fallback_result(request.sorted_pitches()).with_request_id(request.request_id)

			await self._responses.put(result)
