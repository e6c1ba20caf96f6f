#!/usr/bin/env python3

from fractions import Fraction
from keyframelib.core import utils
from keyframelib.core.errors import InputError
from keyframelib.core.models import KeyframeEvent
from keyframelib.core.models import KeyframeKind

#============================================

DEFAULT_FPS = 30

#============================================

def make_event(kind: KeyframeKind, scene_index: int, time: float,
	fps: Fraction) -> KeyframeEvent:
	frame = utils.frames_from_seconds(time, fps)
	return KeyframeEvent(kind=kind, scene_index=scene_index, frame=frame, time=time)

#============================================

def position_keyframes(scenes, fps=DEFAULT_FPS, include_bookends: bool = False) -> tuple:
	"""
	Place keyframe events on scene boundaries.

	Each adjacent pair yields a scene_end event for the earlier scene
	followed by a scene_start event for the later one, so N scenes give
	2 * (N - 1) events. Frame numbers are floor(time * fps).

	Args:
		scenes: Finalized Scene sequence.
		fps: Frame rate as int, float, Fraction or "N/D" string.
		include_bookends: Also emit scene_start for the first scene and
			scene_end for the last scene.

	Returns:
		tuple: KeyframeEvent objects in timeline order.
	"""
	if scenes is None or len(scenes) == 0:
		raise InputError("at least one scene is required to position keyframes")
	fps_value = utils.parse_fps(fps)
	scenes = list(scenes)
	events = []
	if include_bookends:
		events.append(make_event(KeyframeKind.SCENE_START, 0,
			scenes[0].start_time, fps_value))
	for index in range(len(scenes) - 1):
		current = scenes[index]
		following = scenes[index + 1]
		events.append(make_event(KeyframeKind.SCENE_END, index,
			current.end_time, fps_value))
		events.append(make_event(KeyframeKind.SCENE_START, index + 1,
			following.start_time, fps_value))
	if include_bookends:
		last_index = len(scenes) - 1
		events.append(make_event(KeyframeKind.SCENE_END, last_index,
			scenes[last_index].end_time, fps_value))
	return tuple(events)
