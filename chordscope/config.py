"""YAML configuration.

Example ``config.yaml``::

	midi:
	  input_device: "Keystation 49"
	analysis:
	  cache_size: 512
	  prefer_simple_spelling: true
	  bass_as_root: false
	server:
	  host: 127.0.0.1
	  port: 8765
	osc:
	  enabled: false
	  receive_port: 9000
	  send_host: 127.0.0.1
	  send_port: 9001
	notation:
	  major: "∆"
	  minor: "-"

Every key is optional; a missing file means all defaults.
"""

import dataclasses
import logging
import os
import typing

import yaml

import chordscope.analysis
import chordscope.notation


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Settings:

	"""Runtime settings for the command line."""

	input_device: typing.Optional[str] = None
	cache_size: int = chordscope.analysis.DEFAULT_CACHE_SIZE
	prefer_simple_spelling: bool = True
	bass_as_root: bool = False
	server_host: str = "127.0.0.1"
	server_port: int = 8765
	osc_enabled: bool = False
	osc_receive_port: int = 9000
	osc_send_host: str = "127.0.0.1"
	osc_send_port: int = 9001
	notation: chordscope.notation.ChordNotationSettings = dataclasses.field(default_factory=chordscope.notation.ChordNotationSettings)


	@classmethod
	def from_dict (cls, config: typing.Optional[typing.Mapping[str, typing.Any]]) -> "Settings":

		"""Build settings from the nested mapping of a config file.

		Raises:
			ValueError: If a section is not a mapping or a notation value is unknown.
		"""

		config = config or {}

		def section (name: str) -> typing.Mapping[str, typing.Any]:
			value = config.get(name) or {}
			if not isinstance(value, dict):
				raise ValueError(f"Config section '{name}' must be a mapping")
			return value

		midi = section("midi")
		analysis = section("analysis")
		server = section("server")
		osc = section("osc")

		defaults = cls()

		return cls(
			input_device = midi.get("input_device", defaults.input_device),
			cache_size = int(analysis.get("cache_size", defaults.cache_size)),
			prefer_simple_spelling = bool(analysis.get("prefer_simple_spelling", defaults.prefer_simple_spelling)),
			bass_as_root = bool(analysis.get("bass_as_root", defaults.bass_as_root)),
			server_host = str(server.get("host", defaults.server_host)),
			server_port = int(server.get("port", defaults.server_port)),
			osc_enabled = bool(osc.get("enabled", defaults.osc_enabled)),
			osc_receive_port = int(osc.get("receive_port", defaults.osc_receive_port)),
			osc_send_host = str(osc.get("send_host", defaults.osc_send_host)),
			osc_send_port = int(osc.get("send_port", defaults.osc_send_port)),
			notation = chordscope.notation.ChordNotationSettings.from_dict(section("notation"))
		)


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def load_settings (config_path: str = 'config.yaml') -> Settings:

	return Settings.from_dict(load_config(config_path))
