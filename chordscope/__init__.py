"""
chordscope - chord identification and explanation for live MIDI.

Play (or send) a set of notes and chordscope names the chord: every
plausible reading ranked best-first, each with a spelled root, a quality,
its extensions and its inversion, plus a role for every sounding note.

What it does:

- **Pitch-set model.** Immutable ``PitchSet`` with normalisation to a
  bass-first set of pitch classes, rotation and octave-aware indexing.
- **Chord identification.** Each pitch class is tried as the root; the
  intervals above it are classified as third, fifth, seventh or extension
  and the readings are scored and ranked. ``C E G B`` is ``Cmaj7`` first,
  ``Emin(add♭13)/C`` later.
- **Enharmonic spelling.** Degree-correct names with a simple mode that
  prefers ``F♯`` to ``G♭♭`` and a strict mode that keeps theoretical
  spellings.
- **Display roles.** Every note is labelled root, third, fifth, seventh or
  an extension (``b9`` ... ``#13``), with suspended tones and sixths mapped
  to the slot they fill.
- **Cached analysis.** ``HarmonicAnalyzer`` memoises results in a bounded
  LRU cache and never raises to its caller.
- **Live input.** MIDI (with sustain pedal), OSC and WebSocket front ends,
  and a background worker that only ever publishes the latest analysis.

Minimal example:

    ```python
    import chordscope

    analyzer = chordscope.HarmonicAnalyzer()
    result = analyzer.analyze(chordscope.AnalysisRequest(active_pitches=(60, 64, 67, 71)))

    print(result.chord_name)        # Cmaj7
    ```

Package-level exports: ``AnalysisRequest``, ``AnalysisResult``,
``HarmonicAnalyzer``, ``PitchSet``, ``identify``.
"""

import chordscope.analysis
import chordscope.identifier
import chordscope.pitch_set


AnalysisRequest = chordscope.analysis.AnalysisRequest
AnalysisResult = chordscope.analysis.AnalysisResult
HarmonicAnalyzer = chordscope.analysis.HarmonicAnalyzer
PitchSet = chordscope.pitch_set.PitchSet
identify = chordscope.identifier.identify
