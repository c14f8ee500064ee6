import argparse
import asyncio
import json
import logging
import typing

import chordscope.analysis
import chordscope.arpeggio
import chordscope.config
import chordscope.explain
import chordscope.midi_input
import chordscope.midi_utils
import chordscope.notation
import chordscope.osc
import chordscope.server
import chordscope.session
import chordscope.worker


logger = logging.getLogger(__name__)


def build_parser () -> argparse.ArgumentParser:

	parser = argparse.ArgumentParser(prog="chordscope", description="Identify and explain chords.")
	parser.add_argument("--config", default="config.yaml", help="YAML config file (default: config.yaml)")

	commands = parser.add_subparsers(dest="command", required=True)

	analyze = commands.add_parser("analyze", help="Analyse a set of MIDI pitches")
	analyze.add_argument("pitches", nargs="+", type=int, help="MIDI pitches, e.g. 60 64 67")
	analyze.add_argument("--json", action="store_true", help="Print the response envelope as JSON")
	analyze.add_argument("--bass-as-root", action="store_true", help="Treat the lowest note as the root")
	analyze.add_argument("--strict-spelling", action="store_true", help="Keep double accidentals and theoretical roots")
	analyze.add_argument("--select", type=int, default=0, help="Option to resolve (default: 0, the best guess)")

	arpeggio = commands.add_parser("arpeggio", help="Print the arpeggio sequence of a set of MIDI pitches")
	arpeggio.add_argument("pitches", nargs="+", type=int, help="MIDI pitches, e.g. 60 64 67")
	arpeggio.add_argument("--order", choices=chordscope.arpeggio.SORT_MODES, default="pitch", help="Order by pitch or by harmonic function (default: pitch)")
	arpeggio.add_argument("--pattern", choices=chordscope.arpeggio.PATTERNS, default="up", help="Playback pattern (default: up)")
	arpeggio.add_argument("--octaves", type=int, default=1, help="Octaves to span (default: 1)")
	arpeggio.add_argument("--steps", type=int, default=None, help="Steps to print (default: one pass)")
	arpeggio.add_argument("--seed", type=int, default=None, help="Seed for the random pattern")
	arpeggio.add_argument("--bass-as-root", action="store_true", help="Treat the lowest note as the root")

	commands.add_parser("serve", help="Run the WebSocket server with optional OSC and MIDI input")

	return parser


def format_report (
	result: chordscope.analysis.AnalysisResult,
	notation: chordscope.notation.ChordNotationSettings
) -> str:

	"""Human-readable listing of the ranked options and the resolved notes.

	Each note line carries a short explanation of its interval above the
	selected root.
	"""

	if not result.options:
		return chordscope.analysis.PLACEHOLDER

	lines = []

	for i, option in enumerate(result.options):
		marker = "*" if i == result.selected_index else " "
		name = chordscope.notation.format_chord_name(option.display_name, notation)
		lines.append(f"{marker} {i}. {name:<20} score {option.score:g}")

	analysis = result.analysis

	lines.append("")
	lines.append(f"Root: {analysis.root_name}  Quality: {analysis.quality}  Fifth: {analysis.stability}  Seventh: {analysis.function}")

	if analysis.extensions:
		lines.append(f"Extensions: {', '.join(analysis.extensions)}")

	selected = result.selected_option

	if selected is None:
		for pitch, role in analysis.display_roles.items():
			lines.append(f"  {pitch:>3} {analysis.note_names.get(pitch, '?'):<4} {role.value}")
		return "\n".join(lines)

	context = sorted({(pitch - selected.root) % 12 for pitch in analysis.display_roles})

	for pitch, role in analysis.display_roles.items():
		explanation = chordscope.explain.explain_interval(pitch - selected.root, context)
		lines.append(f"  {pitch:>3} {analysis.note_names.get(pitch, '?'):<4} {role.value:<8} {explanation.title}")

	return "\n".join(lines)


def run_analyze (args: argparse.Namespace, settings: chordscope.config.Settings) -> int:

	analyzer = chordscope.analysis.HarmonicAnalyzer(settings.cache_size)

	if args.select < 0:
		logger.error(f"--select must be >= 0, got {args.select}")
		return 2

	request = chordscope.analysis.AnalysisRequest(
		active_pitches = tuple(args.pitches),
		selected_index = args.select,
		force_bass_as_root = args.bass_as_root or settings.bass_as_root,
		prefer_simple_spelling = settings.prefer_simple_spelling and not args.strict_spelling
	)

	result = analyzer.analyze(request)

	if args.json:
		print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
	else:
		print(format_report(result, settings.notation))

	return 0


def run_arpeggio (args: argparse.Namespace, settings: chordscope.config.Settings) -> int:

	"""Print one line per arpeggio step: pitch, spelled name and frequency.

	The harmonic order is measured from the root of the best-guess chord.
	"""

	if args.steps is not None and args.steps < 1:
		logger.error(f"--steps must be at least 1, got {args.steps}")
		return 2

	analyzer = chordscope.analysis.HarmonicAnalyzer(settings.cache_size)

	result = analyzer.analyze(chordscope.analysis.AnalysisRequest(
		active_pitches = tuple(args.pitches),
		force_bass_as_root = args.bass_as_root or settings.bass_as_root,
		prefer_simple_spelling = settings.prefer_simple_spelling
	))

	selected = result.selected_option
	root = selected.root if selected is not None else min(args.pitches)

	try:
		sequence = chordscope.arpeggio.arpeggio_notes(args.pitches, args.order, root_pitch=root, octaves=args.octaves)
	except ValueError as e:
		logger.error(f"Invalid arpeggio: {e}")
		return 2

	names = {pitch % 12: name for pitch, name in result.analysis.note_names.items()}
	cursor = chordscope.arpeggio.ArpeggioCursor(sequence, pattern=args.pattern, seed=args.seed)

	for step in range(args.steps or len(sequence)):
		note = cursor.next()
		frequency = chordscope.midi_utils.pitch_to_frequency(note)
		print(f"{step:>3}. {note:>3} {names.get(note % 12, '?'):<4} {frequency:8.2f} Hz")

	return 0


async def serve (settings: chordscope.config.Settings) -> None:

	"""Run the live session until cancelled.

	Session changes (MIDI or OSC) are submitted to the worker; each current
	result is broadcast to WebSocket clients and sent over OSC.
	"""

	analyzer = chordscope.analysis.HarmonicAnalyzer(settings.cache_size)

	session = chordscope.session.AnalysisSession(
		force_bass_as_root = settings.bass_as_root,
		prefer_simple_spelling = settings.prefer_simple_spelling
	)

	worker = chordscope.worker.AnalysisWorker(analyzer)
	await worker.start()

	session.on_change(lambda s: worker.submit(s.to_request()))

	server = chordscope.server.AnalysisServer(analyzer, settings.server_host, settings.server_port)
	await server.start()

	osc: typing.Optional[chordscope.osc.OscServer] = None

	if settings.osc_enabled:
		osc = chordscope.osc.OscServer(
			session,
			receive_port = settings.osc_receive_port,
			send_port = settings.osc_send_port,
			send_host = settings.osc_send_host
		)
		await osc.start()

	midi = chordscope.midi_input.MidiInput(session, settings.input_device)
	await midi.start()

	try:
		while True:
			result = await worker.next_result()
			server.broadcast(result)

			if osc is not None:
				osc.send_analysis(result)

			logger.info(f"Chord: {chordscope.notation.format_chord_name(result.chord_name, settings.notation)}")

	finally:
		await midi.stop()
		if osc is not None:
			await osc.stop()
		await server.stop()
		await worker.stop()


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point for the chordscope command line.
	"""

	logging.basicConfig(level=logging.INFO)

	args = build_parser().parse_args(argv)

	try:
		settings = chordscope.config.load_settings(args.config)
	except ValueError as e:
		logger.error(f"Invalid config {args.config}: {e}")
		return 2

	if args.command == "analyze":
		return run_analyze(args, settings)

	if args.command == "arpeggio":
		return run_arpeggio(args, settings)

	logger.info("chordscope starting...")

	try:
		asyncio.run(serve(settings))
	except KeyboardInterrupt:
		logger.info("chordscope stopped")

	return 0


if __name__ == "__main__":
	raise SystemExit(main())
