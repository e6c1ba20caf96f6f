#!/usr/bin/env python3

"""
Scene description fill.

A describer is any callable taking (text, scene_index, total_scenes) and
returning a short visual description, typically a wrapper around a text
generation service. Filling happens after segmentation and never changes
scene timing or text.
"""

# local repo modules
from keyframelib.core.errors import InputError

#============================================

SUMMARY_WORD_COUNT = 8

#============================================

def summary_describer(text: str, scene_index: int, total_scenes: int) -> str:
	"""
	Deterministic stand-in describer that quotes the opening words.
	"""
	words = text.split()
	opening = ' '.join(words[:SUMMARY_WORD_COUNT])
	if len(words) > SUMMARY_WORD_COUNT:
		opening += ' ...'
	return f"Scene {scene_index + 1} of {total_scenes}: {opening}"

#============================================

def fill_descriptions(scenes, describer=summary_describer) -> tuple:
	if scenes is None or len(scenes) == 0:
		raise InputError("at least one scene is required")
	scenes = tuple(scenes)
	total = len(scenes)
	filled = []
	for index, scene in enumerate(scenes):
		description = describer(scene.text, index, total)
		if description is None:
			description = ''
		filled.append(scene.with_description(str(description).strip()))
	return tuple(filled)
