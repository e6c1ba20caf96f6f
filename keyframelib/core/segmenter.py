#!/usr/bin/env python3

from keyframelib.core.errors import ConfigurationError
from keyframelib.core.errors import InputError
from keyframelib.core.errors import MalformedEntryError
from keyframelib.core.models import Scene

#============================================

DEFAULT_MIN_DURATION = 10.0
DEFAULT_MAX_DURATION = 20.0
SENTENCE_TERMINALS = ('.', '?', '!')
# closing quotes and brackets that may follow the terminal character
TRAILING_CLOSERS = '"\')]}”’'

#============================================

def ends_sentence(text: str) -> bool:
	stripped = text.rstrip().rstrip(TRAILING_CLOSERS).rstrip()
	return stripped.endswith(SENTENCE_TERMINALS)

#============================================

def validate_entries(entries) -> None:
	if entries is None or len(entries) == 0:
		raise InputError("at least one subtitle entry is required")
	previous = None
	for entry in entries:
		if entry.end_time <= entry.start_time:
			raise MalformedEntryError(
				f"subtitle {entry.index}: end_time must be after start_time"
			)
		if previous is not None:
			if entry.start_time < previous.start_time:
				raise MalformedEntryError(
					f"subtitle {entry.index}: entries are not in chronological order"
				)
			if entry.start_time < previous.end_time:
				raise MalformedEntryError(
					f"subtitle {entry.index}: overlaps previous entry "
					f"({previous.end_time} > {entry.start_time})"
				)
		previous = entry
	return

#============================================

def segment_scenes(entries, min_duration: float = DEFAULT_MIN_DURATION,
	max_duration: float = DEFAULT_MAX_DURATION) -> tuple:
	"""
	Group subtitle entries into scenes.

	A scene closes when an entry ends a sentence and the scene has run at
	least min_duration, when it has run max_duration regardless of the
	sentence, or at the final entry. Transition words never close a scene;
	they only influence transition selection between scenes.

	Args:
		entries: Chronologically ordered SubtitleEntry sequence.
		min_duration: Shortest scene that may close on a sentence end.
		max_duration: Scene length that forces a close.

	Returns:
		tuple: Scene objects in order.
	"""
	if min_duration < 0 or max_duration < 0:
		raise ConfigurationError("segment durations must not be negative")
	if min_duration > max_duration:
		raise ConfigurationError("min_duration must not exceed max_duration")
	validate_entries(entries)
	entries = list(entries)
	scenes = []
	buffer = []
	pending_start = entries[0].start_time
	last_index = len(entries) - 1
	for position, entry in enumerate(entries):
		buffer.append(entry.text.strip())
		current_duration = entry.end_time - pending_start
		sentence_close = ends_sentence(entry.text) and current_duration >= min_duration
		forced_close = current_duration >= max_duration
		if not (sentence_close or forced_close or position == last_index):
			continue
		text = ' '.join(part for part in buffer if part != '')
		scenes.append(Scene(text=text, start_time=pending_start,
			end_time=entry.end_time))
		buffer = []
		if position < last_index:
			pending_start = entries[position + 1].start_time
		else:
			pending_start = entry.end_time
	return tuple(scenes)
