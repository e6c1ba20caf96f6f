#!/usr/bin/env python3

from keyframelib.core import utils
from keyframelib.core.errors import InputError
from keyframelib.core.models import GeneratedStructure
from keyframelib.core.models import GenerationConfig
from keyframelib.core.models import StructureMetadata
from keyframelib.core.positioner import position_keyframes
from keyframelib.core.segmenter import segment_scenes
from keyframelib.core.transitions import select_transitions
from keyframelib.core.visuals import assign_all

#============================================

def generate_structure(scenes, config: GenerationConfig = None, variant=None,
	variant_id: int = None) -> GeneratedStructure:
	"""
	Run positioning, transition selection and visual assignment for one
	variant over a finalized scene sequence.

	Nothing is shared between calls; the same scenes, config and variant
	always give an equal structure.
	"""
	if config is None:
		config = GenerationConfig()
	config.validate()
	if variant is not None:
		variant.validate()
	if scenes is None or len(scenes) == 0:
		raise InputError("at least one scene is required")
	scenes = tuple(scenes)
	events = position_keyframes(scenes, config.fps,
		include_bookends=config.include_bookends)
	keyframes = assign_all(events, len(scenes), variant)
	transitions = select_transitions(scenes, variant)
	resolution = config.resolution
	if variant is not None and variant.resolution is not None:
		resolution = variant.resolution
	resolution = (int(resolution[0]), int(resolution[1]))
	metadata = StructureMetadata(
		total_duration=scenes[-1].end_time - scenes[0].start_time,
		scene_count=len(scenes),
		keyframe_count=len(keyframes),
		fps=float(config.fps),
		resolution=resolution,
		aspect_ratio=utils.aspect_ratio_label(resolution),
		variant_id=variant_id if variant is not None else None,
		variant_name=variant.name if variant is not None else None,
		platform=variant.platform if variant is not None else None,
	)
	return GeneratedStructure(scenes=scenes, keyframes=keyframes,
		transitions=transitions, metadata=metadata, variant=variant)

#============================================

def build_structure(entries, config: GenerationConfig = None) -> GeneratedStructure:
	if config is None:
		config = GenerationConfig()
	config.validate()
	scenes = segment_scenes(entries, config.min_duration, config.max_duration)
	return generate_structure(scenes, config)
