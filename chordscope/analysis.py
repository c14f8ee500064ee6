"""Request/response boundary of the analysis engine.

``HarmonicAnalyzer.analyze()`` is the single entry point used by the worker,
the WebSocket server and the command line. It takes an ``AnalysisRequest``
(the sounding notes plus three user choices) and returns an
``AnalysisResult``: every ranked ``ChordOption`` and the resolved analysis of
the selected one - root, quality, stability, function, extensions, a display
role and a spelled name for every note, and the root/third/fifth/seventh
activation flags.

Three outcomes never raise:

- No notes: the canonical empty result, ``"--"`` everywhere.
- A selected index without an option: every note is marked ``active``.
- An unexpected error while identifying or spelling: logged, and the same
  ``active`` fallback is returned (and not cached).

Results are memoised in an ``AnalysisCache`` (bounded LRU) keyed by the
sorted notes, the selected index and both flags.
"""

import collections
import dataclasses
import logging
import threading
import types
import typing

import chordscope.display_roles
import chordscope.identifier
import chordscope.pitch_set
import chordscope.roles
import chordscope.spelling


logger = logging.getLogger(__name__)


DEFAULT_CACHE_SIZE: int = 512

PLACEHOLDER: str = "--"

CacheKey = typing.Tuple[typing.Tuple[int, ...], int, bool, bool]


@dataclasses.dataclass(frozen=True)
class AnalysisRequest:

	"""One analysis request.

	Attributes:
		active_pitches: Sounding notes as absolute pitches, any order.
		selected_index: Which ranked option to resolve (0 = best guess).
		force_bass_as_root: Treat the lowest note as the root.
		prefer_simple_spelling: Favour simple enharmonic spellings.
		request_id: Caller's sequence number, echoed in the result.
	"""

	active_pitches: typing.Tuple[int, ...] = ()
	selected_index: int = 0
	force_bass_as_root: bool = False
	prefer_simple_spelling: bool = True
	request_id: int = 0


	def __post_init__ (self) -> None:

		if not isinstance(self.active_pitches, tuple):
			object.__setattr__(self, "active_pitches", tuple(self.active_pitches))


	def sorted_pitches (self) -> typing.Tuple[int, ...]:

		"""Distinct pitches, ascending."""

		return tuple(sorted(set(self.active_pitches)))


	def cache_key (self) -> CacheKey:

		"""Key used by ``AnalysisCache`` - everything except the request id."""

		return (
			self.sorted_pitches(),
			self.selected_index,
			self.force_bass_as_root,
			self.prefer_simple_spelling
		)


	@classmethod
	def from_dict (cls, envelope: typing.Mapping[str, typing.Any]) -> "AnalysisRequest":

		"""Build a request from a camelCase envelope.

		Raises:
			ValueError: If ``activePitches`` is missing or holds non-integers,
				or ``selectedOptionIndex`` is negative.
		"""

		if "activePitches" not in envelope:
			raise ValueError("Request envelope requires 'activePitches'")

		raw_pitches = envelope["activePitches"]

		if not isinstance(raw_pitches, (list, tuple)):
			raise ValueError(f"'activePitches' must be a list, got {type(raw_pitches).__name__}")

		if any(isinstance(p, bool) or not isinstance(p, int) for p in raw_pitches):
			raise ValueError(f"'activePitches' must contain integers, got {raw_pitches!r}")

		selected_index = int(envelope.get("selectedOptionIndex", 0))

		if selected_index < 0:
			raise ValueError(f"'selectedOptionIndex' must be >= 0, got {selected_index}")

		return cls(
			active_pitches = tuple(raw_pitches),
			selected_index = selected_index,
			force_bass_as_root = bool(envelope.get("forceBassAsRoot", False)),
			prefer_simple_spelling = bool(envelope.get("preferSimpleSpelling", True)),
			request_id = int(envelope.get("requestId", 0))
		)


	def to_dict (self) -> typing.Dict[str, typing.Any]:

		return {
			"activePitches": list(self.active_pitches),
			"selectedOptionIndex": self.selected_index,
			"forceBassAsRoot": self.force_bass_as_root,
			"preferSimpleSpelling": self.prefer_simple_spelling,
			"requestId": self.request_id,
		}


@dataclasses.dataclass(frozen=True)
class ResolvedAnalysis:

	"""Display-ready analysis of the selected option, keyed by absolute pitch.

	The per-note mappings are read-only views over private copies, so a
	cached result cannot be changed through any of its holders.
	"""

	root_name: str = PLACEHOLDER
	quality: str = PLACEHOLDER
	stability: str = PLACEHOLDER
	function: str = PLACEHOLDER
	extensions: typing.Tuple[str, ...] = ()
	display_roles: typing.Mapping[int, chordscope.roles.DisplayRole] = dataclasses.field(default_factory=dict)
	note_names: typing.Mapping[int, str] = dataclasses.field(default_factory=dict)
	flags: chordscope.display_roles.ActivationFlags = dataclasses.field(default_factory=chordscope.display_roles.ActivationFlags)


	def __post_init__ (self) -> None:

		object.__setattr__(self, "extensions", tuple(self.extensions))
		object.__setattr__(self, "display_roles", types.MappingProxyType(dict(self.display_roles)))
		object.__setattr__(self, "note_names", types.MappingProxyType(dict(self.note_names)))


	def to_dict (self) -> typing.Dict[str, typing.Any]:

		return {
			"rootName": self.root_name,
			"quality": self.quality,
			"stability": self.stability,
			"function": self.function,
			"extensions": list(self.extensions),
			"perNoteDisplayRole": {str(p): role.value for p, role in self.display_roles.items()},
			"perNoteName": {str(p): name for p, name in self.note_names.items()},
			"flags": self.flags.to_dict(),
		}


@dataclasses.dataclass(frozen=True)
class AnalysisResult:

	"""Response for one request: ranked options plus the resolved analysis."""

	options: typing.Tuple[chordscope.identifier.ChordOption, ...] = ()
	selected_index: int = 0
	analysis: ResolvedAnalysis = dataclasses.field(default_factory=ResolvedAnalysis)
	request_id: int = 0


	def __post_init__ (self) -> None:

		if not isinstance(self.options, tuple):
			object.__setattr__(self, "options", tuple(self.options))


	@property
	def selected_option (self) -> typing.Optional[chordscope.identifier.ChordOption]:

		"""The resolved option, or ``None`` when no option was selectable."""

		if 0 <= self.selected_index < len(self.options):
			return self.options[self.selected_index]

		return None


	@property
	def chord_name (self) -> str:

		option = self.selected_option
		return option.display_name if option is not None else PLACEHOLDER


	def with_request_id (self, request_id: int) -> "AnalysisResult":

		"""Return the same result tagged with another request id."""

		if request_id == self.request_id:
			return self

		return dataclasses.replace(self, request_id=request_id)


	def to_dict (self) -> typing.Dict[str, typing.Any]:

		"""Serialise to the camelCase response envelope."""

		return {
			"requestId": self.request_id,
			"candidateOptions": [option.to_dict() for option in self.options],
			"selectedOptionIndex": self.selected_index,
			"chordName": self.chord_name,
			"resolvedAnalysis": self.analysis.to_dict(),
		}


class AnalysisCache:

	"""Thread-safe LRU cache of analysis results.

	Example:
		```python
		cache = AnalysisCache(max_size=2)
		cache.put(key_a, result_a)
		cache.put(key_b, result_b)
		cache.get(key_a)            # refreshes key_a
		cache.put(key_c, result_c)  # evicts key_b
		```
	"""

	def __init__ (self, max_size: int = DEFAULT_CACHE_SIZE) -> None:

		"""Create an empty cache holding at most ``max_size`` results.

		Raises:
			ValueError: If ``max_size`` is less than 1.
		"""

		if max_size < 1:
			raise ValueError(f"Cache size must be at least 1, got {max_size}")

		self.max_size = max_size
		self.hits = 0
		self.misses = 0
		self._entries: "collections.OrderedDict[CacheKey, AnalysisResult]" = collections.OrderedDict()
		self._lock = threading.Lock()


	def __len__ (self) -> int:

		with self._lock:
			return len(self._entries)


	def get (self, key: CacheKey) -> typing.Optional[AnalysisResult]:

		"""Return the cached result for ``key`` and mark it recently used."""

		with self._lock:

			result = self._entries.get(key)

			if result is None:
				self.misses += 1
				return None

			self._entries.move_to_end(key)
			self.hits += 1

			return result


	def put (self, key: CacheKey, result: AnalysisResult) -> None:

		"""Store a result, evicting the least recently used entry when full."""

		with self._lock:

			self._entries[key] = result
			self._entries.move_to_end(key)

			while len(self._entries) > self.max_size:
				self._entries.popitem(last=False)


	def clear (self) -> None:

		with self._lock:
			self._entries.clear()
			self.hits = 0
			self.misses = 0


class HarmonicAnalyzer:

	"""Owns an analysis cache and turns requests into results.

	Example:
		```python
		analyzer = HarmonicAnalyzer()
		result = analyzer.analyze(AnalysisRequest(active_pitches=(60, 64, 67)))
		result.chord_name                    # "C"
		result.analysis.display_roles[64]    # DisplayRole.THIRD
		```
	"""

	def __init__ (self, cache_size: int = DEFAULT_CACHE_SIZE) -> None:

		self.cache = AnalysisCache(cache_size)


	def analyze (self, request: AnalysisRequest) -> AnalysisResult:

		"""Analyse one request, using the cache when possible."""

		key = request.cache_key()
		cached = self.cache.get(key)

		if cached is not None:
			return cached.with_request_id(request.request_id)

		notes = request.sorted_pitches()

		if not notes:
			result = empty_result()
			self.cache.put(key, result)
			return result.with_request_id(request.request_id)

		try:
			result = self._compute(notes, request)

		except Exception:
			logger.exception(f"Chord analysis failed for {list(notes)}")
			return fallback_result(notes, selected_index=request.selected_index).with_request_id(request.request_id)

		self.cache.put(key, result)

		return result.with_request_id(request.request_id)


	def _compute (self, notes: typing.Tuple[int, ...], request: AnalysisRequest) -> AnalysisResult:

		"""Identify, spell and map roles for a non-empty note set."""

		chord = chordscope.pitch_set.PitchSet.from_notes(notes).normalize()
		simple = request.prefer_simple_spelling

		names_by_class = chordscope.spelling.spell_map(chord, 0, simple)

		options = tuple(chordscope.identifier.identify(
			chord,
			bass_as_root = request.force_bass_as_root,
			prefer_simple_spelling = simple
		))

		if not 0 <= request.selected_index < len(options):
			logger.debug(f"No option {request.selected_index} among {len(options)} for {list(notes)}")
			note_names = {note: names_by_class[note % 12] for note in notes}
			return fallback_result(notes, options, request.selected_index, note_names)

		selected = options[request.selected_index]

		# Respell against the selected root so enharmonics follow its degrees.
		rotated = chord.rotate(chord.index_of(selected.root))
		names_by_class.update(chordscope.spelling.spell_map(rotated, 0, simple))

		note_roles = {note: selected.roles[note % 12] for note in notes}
		display, flags = chordscope.display_roles.map_display_roles(note_roles, selected.detailed_quality)

		quality = selected.detailed_quality

		return AnalysisResult(
			options = options,
			selected_index = request.selected_index,
			analysis = ResolvedAnalysis(
				root_name = selected.root_name,
				quality = quality.third_quality.value,
				stability = quality.fifth_quality.value,
				function = quality.seventh_quality.value,
				extensions = quality.extensions,
				display_roles = display,
				note_names = {note: names_by_class[note % 12] for note in notes},
				flags = flags
			)
		)


def empty_result () -> AnalysisResult:

	"""The canonical "no notes" result."""

	return AnalysisResult()


def fallback_result (
	notes: typing.Iterable[int],
	options: typing.Tuple[chordscope.identifier.ChordOption, ...] = (),
	selected_index: int = 0,
	note_names: typing.Optional[typing.Dict[int, str]] = None
) -> AnalysisResult:

	"""A result with no chord name where every note is simply ``active``."""

	return AnalysisResult(
		options = options,
		selected_index = selected_index,
		analysis = ResolvedAnalysis(
			display_roles = {note: chordscope.roles.DisplayRole.ACTIVE for note in notes},
			note_names = dict(note_names or {})
		)
	)
