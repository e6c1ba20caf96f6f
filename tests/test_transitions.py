"""
Pytest coverage for transition selection.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from keyframe_fixtures import make_scenes
from keyframelib.core.errors import InputError
from keyframelib.core.models import TransitionKind
from keyframelib.core.models import VariantConfig
from keyframelib.core import transitions

#============================================

def _pair(text_a: str, text_b: str):
	scenes = make_scenes([text_a, text_b])
	return transitions.select_transition(scenes[0], scenes[1])

#============================================

def test_tutorial_pair_is_topic_shift() -> None:
	"""
	The tutorial scenes share no leading tokens, so they dip to black.
	"""
	transition = _pair(
		"Welcome to this tutorial. Today we learn keyframes, but first let's review.",
		"That's the plan.",
	)
	assert transition.kind == TransitionKind.DIP_TO_BLACK
	assert transition.duration == pytest.approx(0.7)
	assert transition.params == {'fade_out': 0.3, 'black_hold': 0.1, 'fade_in': 0.3}

#============================================

def test_overlap_of_three_is_not_topic_shift() -> None:
	transition = _pair("alpha beta gamma delta", "alpha beta gamma omega")
	assert transitions.lexical_overlap("alpha beta gamma delta",
		"alpha beta gamma omega") == 3
	assert transition.kind == TransitionKind.CROSSFADE
	assert transition.params == {'easing': 'ease_in_out'}
	assert transition.duration == pytest.approx(0.5)

#============================================

def test_vocabulary_gives_wipe() -> None:
	transition = _pair("we cook the rice, then", "we cook the beans")
	assert transition.kind == TransitionKind.WIPE
	assert transition.params == {'direction': 'left_to_right'}

#============================================

def test_topic_shift_beats_vocabulary() -> None:
	transition = _pair("next we move on", "totally unrelated words here")
	assert transition.kind == TransitionKind.DIP_TO_BLACK

#============================================

def test_vocabulary_only_checked_in_first_scene() -> None:
	transition = _pair("we cook the rice", "we cook the beans next")
	assert transition.kind == TransitionKind.CROSSFADE

#============================================

def test_only_first_ten_tokens_count() -> None:
	text_a = "one two three four five six seven eight nine ten shared words here"
	assert transitions.lexical_overlap(text_a, "shared words here") == 0
	assert _pair(text_a, "shared words here").kind == TransitionKind.DIP_TO_BLACK

#============================================

def test_overlap_is_case_insensitive() -> None:
	assert transitions.lexical_overlap("The Big Red Dog", "the big red cat") == 3

#============================================

def test_selection_is_pure_function_of_text() -> None:
	text_a = "we cook the rice, then"
	text_b = "we cook the beans"
	first = make_scenes([text_a, text_b], scene_length=4.0)
	second = make_scenes([text_a, text_b], scene_length=19.0)
	first_transition = transitions.select_transition(first[0], first[1])
	second_transition = transitions.select_transition(second[0], second[1])
	assert first_transition == second_transition

#============================================

def test_select_transitions_count_and_indices() -> None:
	scenes = make_scenes(["a b c", "a b c", "x y z", "x y z"])
	selected = transitions.select_transitions(scenes)
	assert len(selected) == len(scenes) - 1
	assert [(transition.from_scene, transition.to_scene) for transition in selected] == [(0, 1), (1, 2), (2, 3)]
	assert [transition.kind for transition in selected] == [
		TransitionKind.CROSSFADE,
		TransitionKind.DIP_TO_BLACK,
		TransitionKind.CROSSFADE,
	]

#============================================

def test_single_scene_has_no_transitions() -> None:
	assert transitions.select_transitions(make_scenes(["solo"])) == ()

#============================================

def test_empty_scenes_raise() -> None:
	with pytest.raises(InputError):
		transitions.select_transitions([])

#============================================

def test_variant_scales_durations() -> None:
	scenes = make_scenes(["next we move on", "totally unrelated words here"])
	variant = VariantConfig(name="slow", transition_duration_multiplier=2.0)
	transition = transitions.select_transition(scenes[0], scenes[1], variant=variant)
	assert transition.kind == TransitionKind.DIP_TO_BLACK
	assert transition.duration == pytest.approx(1.4)
	assert transition.params['fade_out'] == pytest.approx(0.6)
	assert transition.params['black_hold'] == pytest.approx(0.2)

#============================================

def test_variant_forces_zoom_style() -> None:
	scenes = make_scenes(["a b c", "a b c"])
	variant = VariantConfig(name="zoomy", transition_style=TransitionKind.ZOOM)
	transition = transitions.select_transition(scenes[0], scenes[1], variant=variant)
	assert transition.kind == TransitionKind.ZOOM
	assert transition.params == {'zoom_factor': 1.1}
	assert transition.duration == pytest.approx(0.4)

#============================================

def test_selected_transition_is_read_only() -> None:
	transition = _pair("we cook the rice, then", "we cook the beans")
	with pytest.raises(TypeError):
		transition.params['direction'] = 'right_to_left'
	assert hash(transition) == hash(_pair("we cook the rice, then", "we cook the beans"))
	assert transition.to_dict()['direction'] == 'left_to_right'
