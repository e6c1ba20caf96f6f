#!/usr/bin/env python3

import os
import yaml
from keyframelib.core import utils
from keyframelib.core.errors import ConfigurationError
from keyframelib.core.errors import InputError
from keyframelib.core.errors import MalformedEntryError
from keyframelib.core.models import GenerationConfig
from keyframelib.core.models import SubtitleEntry
from keyframelib.core.models import TransitionKind
from keyframelib.core.models import VariantConfig

#============================================

MAX_FILE_SIZE = 10 ** 7
CONFIG_VERSION = 1

#============================================

class SubtitleLoader():
	def __init__(self, subtitle_file: str):
		self.subtitle_file = subtitle_file

	#============================
	def load(self) -> tuple:
		utils.ensure_file_exists(self.subtitle_file)
		file_size = os.path.getsize(self.subtitle_file)
		if file_size > MAX_FILE_SIZE:
			raise InputError("subtitle file is larger than 10MB")
		with open(self.subtitle_file, 'r', encoding='utf-8-sig') as handle:
			text = handle.read()
		entries = parse_srt_text(text)
		if len(entries) == 0:
			raise InputError(f"no subtitle entries found in {self.subtitle_file}")
		return entries

#============================================

def load_subtitles(subtitle_file: str) -> tuple:
	return SubtitleLoader(subtitle_file).load()

#============================================

def _split_blocks(text: str) -> list:
	blocks = []
	current = []
	for raw_line in text.replace('\r\n', '\n').replace('\r', '\n').split('\n'):
		line = raw_line.strip()
		if line == '':
			if len(current) > 0:
				blocks.append(current)
				current = []
			continue
		current.append(line)
	if len(current) > 0:
		blocks.append(current)
	return blocks

#============================================

def parse_srt_text(text: str) -> tuple:
	"""
	Parse SRT subtitle text into SubtitleEntry objects.

	Each block is an index line, a timing line and one or more text lines.
	The index line may be missing. Blocks with no text are skipped.

	Args:
		text: Full subtitle file contents.

	Returns:
		tuple: SubtitleEntry objects in file order.
	"""
	entries = []
	for block_number, block in enumerate(_split_blocks(text), start=1):
		lines = list(block)
		index = block_number
		if '-->' not in lines[0]:
			if not lines[0].isdigit():
				raise MalformedEntryError(
					f"subtitle block {block_number}: expected index line, got {lines[0]!r}"
				)
			index = int(lines.pop(0))
		if len(lines) == 0 or '-->' not in lines[0]:
			raise MalformedEntryError(f"subtitle {index}: missing timing line")
		timing = lines.pop(0)
		parts = timing.split('-->')
		if len(parts) != 2:
			raise MalformedEntryError(f"subtitle {index}: invalid timing line {timing!r}")
		start_time = utils.parse_srt_timecode(parts[0])
		# position hints such as "X1:100" may trail the end time
		end_field = parts[1].strip().split()
		if len(end_field) == 0:
			raise MalformedEntryError(f"subtitle {index}: missing end time")
		end_time = utils.parse_srt_timecode(end_field[0])
		cue_text = ' '.join(lines).strip()
		if cue_text == '':
			continue
		entries.append(SubtitleEntry(start_time=start_time, end_time=end_time,
			text=cue_text, index=index))
	return tuple(entries)

#============================================

def coerce_bool(value, config_path: str, key_path: str) -> bool:
	if isinstance(value, bool):
		return value
	if isinstance(value, int):
		return bool(value)
	if isinstance(value, str):
		normalized = value.strip().lower()
		if normalized in ("true", "yes", "1", "on"):
			return True
		if normalized in ("false", "no", "0", "off"):
			return False
	raise ConfigurationError(f"config {config_path}: {key_path} must be a boolean")

#============================================

def coerce_float(value, config_path: str, key_path: str) -> float:
	if isinstance(value, bool):
		raise ConfigurationError(f"config {config_path}: {key_path} must be a number")
	if isinstance(value, (int, float)):
		return float(value)
	if isinstance(value, str):
		try:
			return float(value)
		except ValueError as error:
			raise ConfigurationError(
				f"config {config_path}: {key_path} must be a number"
			) from error
	raise ConfigurationError(f"config {config_path}: {key_path} must be a number")

#============================================

def coerce_resolution(value, config_path: str, key_path: str) -> tuple:
	if not isinstance(value, (list, tuple)) or len(value) != 2:
		raise ConfigurationError(f"config {config_path}: {key_path} must be [width, height]")
	try:
		width = int(value[0])
		height = int(value[1])
	except (TypeError, ValueError) as error:
		raise ConfigurationError(
			f"config {config_path}: {key_path} must be integers"
		) from error
	if width <= 0 or height <= 0:
		raise ConfigurationError(f"config {config_path}: {key_path} must be positive")
	return (width, height)

#============================================

def coerce_transition_style(value, config_path: str, key_path: str):
	if value is None:
		return None
	normalized = str(value).strip().lower()
	if normalized in ('', 'auto'):
		return None
	for kind in TransitionKind:
		if kind.value == normalized:
			return kind
	raise ConfigurationError(
		f"config {config_path}: {key_path} must be auto or one of "
		+ ", ".join(kind.value for kind in TransitionKind)
	)

#============================================

def default_config() -> dict:
	"""
	Build the default config dictionary.

	Returns:
		dict: Default configuration values.
	"""
	return {
		'keyframes': CONFIG_VERSION,
		'profile': {
			'fps': 30,
			'resolution': [1920, 1080],
		},
		'segmentation': {
			'min_duration': 10.0,
			'max_duration': 20.0,
		},
		'keyframes_options': {
			'include_bookends': False,
		},
		'variants': [],
	}

#============================================

def build_config_text(config: dict) -> str:
	header = "# keyframe generator config\n"
	return header + yaml.safe_dump(config, sort_keys=False)

#============================================

def write_config_file(config_path: str, config: dict) -> None:
	text = build_config_text(config)
	os.makedirs(os.path.dirname(config_path) or '.', exist_ok=True)
	with open(config_path, 'w', encoding='utf-8') as handle:
		handle.write(text)
	return

#============================================

def load_config(config_path: str) -> dict:
	"""
	Load a config file from disk.

	Args:
		config_path: Config file path.

	Returns:
		dict: Parsed config dictionary.
	"""
	utils.ensure_file_exists(config_path)
	if os.path.getsize(config_path) > MAX_FILE_SIZE:
		raise ConfigurationError("config file is larger than 10MB")
	with open(config_path, 'r', encoding='utf-8') as handle:
		data = yaml.safe_load(handle)
	if not isinstance(data, dict):
		raise ConfigurationError("config file must be a mapping")
	if data.get('keyframes') != CONFIG_VERSION:
		raise ConfigurationError(f"config file must set keyframes: {CONFIG_VERSION}")
	return data

#============================================

def _section(config: dict, name: str, config_path: str) -> dict:
	section = config.get(name) if isinstance(config, dict) else None
	if section is None:
		return {}
	if not isinstance(section, dict):
		raise ConfigurationError(f"config {config_path}: {name} must be a mapping")
	return section

#============================================

def build_generation_config(config: dict, config_path: str = '<defaults>') -> GenerationConfig:
	"""
	Normalize generation settings with defaults.

	Args:
		config: Raw config dictionary.
		config_path: Config file path used in error messages.

	Returns:
		GenerationConfig: Validated settings.
	"""
	defaults = default_config()
	profile = _section(config, 'profile', config_path)
	segmentation = _section(config, 'segmentation', config_path)
	options = _section(config, 'keyframes_options', config_path)
	fps = utils.parse_fps(profile.get('fps', defaults['profile']['fps']))
	resolution = coerce_resolution(profile.get('resolution',
		defaults['profile']['resolution']), config_path, "profile.resolution")
	min_duration = coerce_float(segmentation.get('min_duration',
		defaults['segmentation']['min_duration']), config_path,
		"segmentation.min_duration")
	max_duration = coerce_float(segmentation.get('max_duration',
		defaults['segmentation']['max_duration']), config_path,
		"segmentation.max_duration")
	include_bookends = coerce_bool(options.get('include_bookends',
		defaults['keyframes_options']['include_bookends']), config_path,
		"keyframes_options.include_bookends")
	generation = GenerationConfig(
		fps=fps,
		min_duration=min_duration,
		max_duration=max_duration,
		resolution=resolution,
		include_bookends=include_bookends,
	)
	generation.validate()
	return generation

#============================================

def build_variant_config(entry: dict, config_path: str, key_path: str) -> VariantConfig:
	if not isinstance(entry, dict):
		raise ConfigurationError(f"config {config_path}: {key_path} must be a mapping")
	name = entry.get('name')
	if name is None or str(name).strip() == '':
		raise ConfigurationError(f"config {config_path}: {key_path}.name is required")
	resolution = entry.get('resolution')
	if resolution is not None:
		resolution = coerce_resolution(resolution, config_path, f"{key_path}.resolution")
	variant = VariantConfig(
		name=str(name),
		platform=str(entry.get('platform', 'universal')).lower(),
		contrast_multiplier=coerce_float(entry.get('contrast', 1.0),
			config_path, f"{key_path}.contrast"),
		saturation_multiplier=coerce_float(entry.get('saturation', 1.0),
			config_path, f"{key_path}.saturation"),
		transition_duration_multiplier=coerce_float(entry.get('transition_duration', 1.0),
			config_path, f"{key_path}.transition_duration"),
		transition_style=coerce_transition_style(entry.get('transition_style'),
			config_path, f"{key_path}.transition_style"),
		resolution=resolution,
	)
	variant.validate()
	return variant

#============================================

def build_variant_configs(config: dict, config_path: str = '<defaults>') -> list:
	if not isinstance(config, dict):
		return []
	entries = config.get('variants')
	if entries is None:
		return []
	if not isinstance(entries, list):
		raise ConfigurationError(f"config {config_path}: variants must be a list")
	variants = []
	for index, entry in enumerate(entries):
		variants.append(build_variant_config(entry, config_path, f"variants[{index}]"))
	return variants
