#!/usr/bin/env python3

import math
import os
import re
from decimal import ROUND_HALF_UP
from decimal import Decimal
from fractions import Fraction
from keyframelib.core.errors import ConfigurationError
from keyframelib.core.errors import InputError
from keyframelib.core.errors import MalformedEntryError

#============================================

_QUIET_MODE = False

SRT_TIMECODE_RE = re.compile(r'^(\d+):(\d{1,2}):(\d{1,2})[,.](\d{1,3})$')

#============================================

def set_quiet_mode(value: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(value)
	return

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def parse_fps(raw_fps) -> Fraction:
	if raw_fps is None:
		raise ConfigurationError("profile.fps is required")
	if isinstance(raw_fps, bool):
		raise ConfigurationError("profile.fps must be int, float, or fraction string")
	if isinstance(raw_fps, Fraction):
		fps = raw_fps
	elif isinstance(raw_fps, int):
		fps = Fraction(raw_fps, 1)
	elif isinstance(raw_fps, float):
		fps = Fraction(str(raw_fps))
	elif isinstance(raw_fps, str):
		value = raw_fps.strip()
		try:
			if '/' in value:
				parts = value.split('/')
				fps = Fraction(int(parts[0]), int(parts[1]))
			else:
				fps = Fraction(value)
		except (ValueError, ZeroDivisionError) as error:
			raise ConfigurationError(f"invalid fps value: {raw_fps}") from error
	else:
		raise ConfigurationError("profile.fps must be int, float, or fraction string")
	if fps <= 0:
		raise ConfigurationError("fps must be positive")
	return fps

#============================================

def frames_from_seconds(seconds, fps: Fraction) -> int:
	"""
	Convert a time in seconds to a frame index.

	Frame indices are the floor of elapsed time in frames, computed on the
	exact fraction of the decimal time string.
	"""
	if fps <= 0:
		raise ConfigurationError("fps must be positive")
	seconds_fraction = Fraction(str(seconds))
	return math.floor(seconds_fraction * fps)

#============================================

def seconds_from_frames(frames: int, fps: Fraction) -> float:
	seconds_fraction = Fraction(frames, 1) / fps
	return float(seconds_fraction)

#============================================

def parse_srt_timecode(raw_time: str) -> float:
	"""
	Parse an HH:MM:SS,mmm subtitle timecode into seconds.

	A period is accepted as the millisecond separator as well.
	"""
	if raw_time is None:
		raise MalformedEntryError("time value is required")
	value = raw_time.strip()
	match = SRT_TIMECODE_RE.match(value)
	if match is None:
		raise MalformedEntryError(f"invalid subtitle timecode: {raw_time!r}")
	hours = Decimal(match.group(1))
	minutes = Decimal(match.group(2))
	seconds = Decimal(match.group(3))
	millis = Decimal(match.group(4).ljust(3, '0'))
	if minutes >= 60 or seconds >= 60:
		raise MalformedEntryError(f"invalid subtitle timecode: {raw_time!r}")
	total = hours * Decimal(3600) + minutes * Decimal(60) + seconds
	total += millis / Decimal(1000)
	return float(total)

#============================================

def seconds_to_millis(seconds: float) -> int:
	value = Decimal(str(seconds))
	millis = value * Decimal(1000)
	millis = millis.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
	result = int(millis)
	if result < 0:
		result = 0
	return result

#============================================

def _split_millis(seconds: float) -> tuple:
	total_millis = seconds_to_millis(seconds)
	hours = total_millis // 3600000
	remainder = total_millis % 3600000
	minutes = remainder // 60000
	remainder = remainder % 60000
	seconds_part = remainder // 1000
	millis_part = remainder % 1000
	return (hours, minutes, seconds_part, millis_part)

#============================================

def format_srt_timecode(seconds: float) -> str:
	(hours, minutes, seconds_part, millis_part) = _split_millis(seconds)
	return f"{hours:02d}:{minutes:02d}:{seconds_part:02d},{millis_part:03d}"

#============================================

def format_timestamp(seconds: float) -> str:
	(hours, minutes, seconds_part, millis_part) = _split_millis(seconds)
	return f"{hours:02d}:{minutes:02d}:{seconds_part:02d}.{millis_part:03d}"

#============================================

def reduce_fraction(num: int, den: int) -> tuple:
	if den == 0:
		return (num, den)
	gcd = math.gcd(num, den)
	if gcd == 0:
		gcd = 1
	return (num // gcd, den // gcd)

#============================================

def aspect_ratio_label(resolution: tuple) -> str:
	(num, den) = reduce_fraction(int(resolution[0]), int(resolution[1]))
	return f"{num}:{den}"

#============================================

def ensure_file_exists(filepath: str) -> None:
	if not os.path.exists(filepath):
		raise InputError(f"file not found: {filepath}")
	return
