#!/usr/bin/env python3

import enum
from keyframelib.core.errors import InputError
from keyframelib.core.models import KeyframeKind
from keyframelib.core.models import MotionIntensity
from keyframelib.core.models import VisualProperties

#============================================

class NarrativeRole(enum.Enum):
	HOOK = 'hook'
	TRANSITION = 'transition'
	COMPLETION = 'completion'

#============================================

ROLE_PROFILES = {
	NarrativeRole.HOOK: VisualProperties(
		contrast=2.0,
		saturation=1.5,
		motion_intensity=MotionIntensity.HIGH,
		zoom_start=1.05,
		zoom_end=1.0,
		neon_coverage=0.15,
		subtitle_scale=1.2,
	),
	NarrativeRole.TRANSITION: VisualProperties(
		contrast=1.5,
		saturation=1.4,
		motion_intensity=MotionIntensity.MEDIUM,
		zoom_start=1.0,
		zoom_end=1.03,
		neon_coverage=0.12,
		subtitle_scale=1.0,
	),
	NarrativeRole.COMPLETION: VisualProperties(
		contrast=1.3,
		saturation=1.2,
		motion_intensity=MotionIntensity.LOW,
		zoom_start=1.0,
		zoom_end=1.02,
		neon_coverage=0.10,
		subtitle_scale=1.0,
	),
}

#============================================

def role_for(scene_index: int, kind: KeyframeKind, scene_count: int) -> NarrativeRole:
	if scene_count <= 0:
		raise InputError("scene_count must be positive")
	if scene_index == 0 and kind == KeyframeKind.SCENE_START:
		return NarrativeRole.HOOK
	if scene_index == scene_count - 1 and kind == KeyframeKind.SCENE_END:
		return NarrativeRole.COMPLETION
	return NarrativeRole.TRANSITION

#============================================

def assign_visual_properties(event, scene_count: int, variant=None):
	"""
	Attach the role profile to a keyframe event.

	Args:
		event: KeyframeEvent without visual properties.
		scene_count: Total number of scenes in the generation.
		variant: Optional VariantConfig whose multipliers scale contrast
			and saturation.

	Returns:
		KeyframeEvent: Copy of the event with properties attached.
	"""
	role = role_for(event.scene_index, event.kind, scene_count)
	props = ROLE_PROFILES[role]
	if variant is not None:
		props = props.scaled(contrast=variant.contrast_multiplier,
			saturation=variant.saturation_multiplier)
	return event.with_visual_properties(props)

#============================================

def assign_all(events, scene_count: int, variant=None) -> tuple:
	return tuple(assign_visual_properties(event, scene_count, variant)
		for event in events)
