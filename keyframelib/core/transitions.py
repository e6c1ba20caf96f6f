#!/usr/bin/env python3

from keyframelib.core.errors import InputError
from keyframelib.core.models import TransitionKind
from keyframelib.core.models import TransitionSpec

#============================================

OVERLAP_TOKEN_COUNT = 10
TOPIC_SHIFT_OVERLAP = 3
TOKEN_PUNCTUATION = '.,;:!?"\'()[]{}…-—“”‘’'

TRANSITION_VOCABULARY = frozenset((
	'after', 'afterwards', 'before', 'but', 'finally', 'first', 'however',
	'later', 'meanwhile', 'next', 'now', 'second', 'then', 'third',
))

# base durations in seconds before any variant multiplier
DIP_TO_BLACK_TIMING = {
	'fade_out': 0.3,
	'black_hold': 0.1,
	'fade_in': 0.3,
}
DIP_TO_BLACK_DURATION = 0.7
WIPE_DURATION = 0.5
CROSSFADE_DURATION = 0.5
ZOOM_DURATION = 0.4
ZOOM_FACTOR = 1.1

#============================================

def leading_tokens(text: str, count: int = OVERLAP_TOKEN_COUNT) -> set:
	return set(text.lower().split()[:count])

#============================================

def lexical_overlap(text_a: str, text_b: str) -> int:
	return len(leading_tokens(text_a) & leading_tokens(text_b))

#============================================

def contains_transition_word(text: str) -> bool:
	for raw_token in text.lower().split():
		token = raw_token.strip(TOKEN_PUNCTUATION)
		if token in TRANSITION_VOCABULARY:
			return True
	return False

#============================================

def classify_pair(text_a: str, text_b: str) -> TransitionKind:
	"""
	Classify the relationship between two adjacent scene texts.

	Topic shift (overlap below 3) wins over the vocabulary check, which
	wins over plain continuation.
	"""
	if lexical_overlap(text_a, text_b) < TOPIC_SHIFT_OVERLAP:
		return TransitionKind.DIP_TO_BLACK
	if contains_transition_word(text_a):
		return TransitionKind.WIPE
	return TransitionKind.CROSSFADE

#============================================

def build_transition(kind: TransitionKind, duration_multiplier: float = 1.0,
	from_scene: int = 0, to_scene: int = 1) -> TransitionSpec:
	scale = duration_multiplier
	if kind == TransitionKind.DIP_TO_BLACK:
		params = {}
		for key, value in DIP_TO_BLACK_TIMING.items():
			params[key] = value * scale
		return TransitionSpec(kind=kind, duration=DIP_TO_BLACK_DURATION * scale,
			params=params, from_scene=from_scene, to_scene=to_scene)
	if kind == TransitionKind.WIPE:
		return TransitionSpec(kind=kind, duration=WIPE_DURATION * scale,
			params={'direction': 'left_to_right'},
			from_scene=from_scene, to_scene=to_scene)
	if kind == TransitionKind.CROSSFADE:
		return TransitionSpec(kind=kind, duration=CROSSFADE_DURATION * scale,
			params={'easing': 'ease_in_out'},
			from_scene=from_scene, to_scene=to_scene)
	if kind == TransitionKind.ZOOM:
		return TransitionSpec(kind=kind, duration=ZOOM_DURATION * scale,
			params={'zoom_factor': ZOOM_FACTOR},
			from_scene=from_scene, to_scene=to_scene)
	raise ValueError(f"unsupported transition kind: {kind}")

#============================================

def select_transition(scene_a, scene_b, variant=None,
	from_scene: int = 0, to_scene: int = 1) -> TransitionSpec:
	kind = classify_pair(scene_a.text, scene_b.text)
	multiplier = 1.0
	if variant is not None:
		multiplier = variant.transition_duration_multiplier
		if variant.transition_style is not None:
			kind = variant.transition_style
	return build_transition(kind, multiplier, from_scene, to_scene)

#============================================

def select_transitions(scenes, variant=None) -> tuple:
	if scenes is None or len(scenes) == 0:
		raise InputError("at least one scene is required to select transitions")
	scenes = list(scenes)
	transitions = []
	for index in range(len(scenes) - 1):
		transitions.append(select_transition(scenes[index], scenes[index + 1],
			variant=variant, from_scene=index, to_scene=index + 1))
	return tuple(transitions)
