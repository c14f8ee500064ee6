import pathlib

import pytest

import chordscope.config


def test_missing_file_gives_defaults (tmp_path: pathlib.Path) -> None:

	"""A missing config file means default settings."""

	settings = chordscope.config.load_settings(str(tmp_path / "missing.yaml"))

	assert settings == chordscope.config.Settings()
	assert settings.cache_size == 512
	assert settings.server_port == 8765


def test_yaml_values_are_loaded (tmp_path: pathlib.Path) -> None:

	"""Nested YAML sections map onto settings fields."""

	path = tmp_path / "config.yaml"
	path.write_text(
		"midi:\n"
		"  input_device: Keystation 49\n"
		"analysis:\n"
		"  cache_size: 64\n"
		"  prefer_simple_spelling: false\n"
		"  bass_as_root: true\n"
		"server:\n"
		"  port: 9999\n"
		"osc:\n"
		"  enabled: true\n"
		"  send_port: 7000\n"
		"notation:\n"
		"  minor: m\n"
		"  accidental: b\n",
		encoding="utf-8"
	)

	settings = chordscope.config.load_settings(str(path))

	assert settings.input_device == "Keystation 49"
	assert settings.cache_size == 64
	assert settings.prefer_simple_spelling is False
	assert settings.bass_as_root is True
	assert settings.server_port == 9999
	assert settings.server_host == "127.0.0.1"
	assert settings.osc_enabled is True
	assert settings.osc_send_port == 7000
	assert settings.notation.minor == "m"
	assert settings.notation.accidental == "b"


def test_empty_file_gives_defaults (tmp_path: pathlib.Path) -> None:

	"""An empty YAML document is treated like a missing one."""

	path = tmp_path / "config.yaml"
	path.write_text("", encoding="utf-8")

	assert chordscope.config.load_settings(str(path)) == chordscope.config.Settings()


def test_invalid_sections_raise () -> None:

	"""Sections must be mappings and notation values must be known."""

	with pytest.raises(ValueError):
		chordscope.config.Settings.from_dict({"analysis": [1, 2]})

	with pytest.raises(ValueError):
		chordscope.config.Settings.from_dict({"notation": {"major": "M"}})
