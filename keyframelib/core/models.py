#!/usr/bin/env python3

"""
Immutable data model shared by the keyframe pipeline.
"""

# Standard Library
import dataclasses
import enum
import types
from fractions import Fraction
from typing import Optional

# local repo modules
from keyframelib.core import utils
from keyframelib.core.errors import ConfigurationError
from keyframelib.core.errors import MalformedEntryError

#============================================

class KeyframeKind(enum.Enum):
	SCENE_END = 'scene_end'
	SCENE_START = 'scene_start'

#============================================

class TransitionKind(enum.Enum):
	CROSSFADE = 'crossfade'
	DIP_TO_BLACK = 'dip_to_black'
	WIPE = 'wipe'
	ZOOM = 'zoom'

#============================================

class MotionIntensity(enum.Enum):
	LOW = 'low'
	MEDIUM = 'medium'
	HIGH = 'high'

#============================================

@dataclasses.dataclass(frozen=True)
class SubtitleEntry:
	"""
	One timed subtitle cue.

	Attributes:
		start_time: Cue start in seconds.
		end_time: Cue end in seconds, strictly after start_time.
		text: Cue text with lines joined by spaces.
		index: Cue number from the source file, 0 when unknown.
	"""
	start_time: float
	end_time: float
	text: str
	index: int = 0

	def __post_init__(self):
		if self.start_time < 0:
			raise MalformedEntryError(
				f"subtitle {self.index}: start_time must be >= 0 ({self.start_time})"
			)
		if self.end_time <= self.start_time:
			raise MalformedEntryError(
				f"subtitle {self.index}: end_time must be after start_time "
				f"({self.start_time} -> {self.end_time})"
			)

	@property
	def duration(self) -> float:
		return self.end_time - self.start_time

#============================================

@dataclasses.dataclass(frozen=True)
class Scene:
	"""
	A contiguous span of narration.

	Only description may be filled after segmentation, through
	with_description(), which returns a new Scene.
	"""
	text: str
	start_time: float
	end_time: float
	description: str = ""

	def __post_init__(self):
		if self.end_time <= self.start_time:
			raise MalformedEntryError(
				f"scene end_time must be after start_time "
				f"({self.start_time} -> {self.end_time})"
			)

	@property
	def duration(self) -> float:
		return self.end_time - self.start_time

	def with_description(self, description: str) -> 'Scene':
		return dataclasses.replace(self, description=description)

#============================================

@dataclasses.dataclass(frozen=True)
class VisualProperties:
	contrast: float
	saturation: float
	motion_intensity: MotionIntensity
	zoom_start: float
	zoom_end: float
	neon_coverage: float
	subtitle_scale: float

	def __post_init__(self):
		if self.contrast <= 0 or self.saturation <= 0:
			raise ConfigurationError("contrast and saturation must be positive")
		if self.neon_coverage < 0 or self.neon_coverage > 1:
			raise ConfigurationError("neon_coverage must be between 0 and 1")
		if self.subtitle_scale <= 0:
			raise ConfigurationError("subtitle_scale must be positive")

	def scaled(self, contrast: float = 1.0, saturation: float = 1.0) -> 'VisualProperties':
		return dataclasses.replace(self,
			contrast=self.contrast * contrast,
			saturation=self.saturation * saturation)

	def to_dict(self) -> dict:
		return {
			'contrast': self.contrast,
			'saturation': self.saturation,
			'motion_intensity': self.motion_intensity.value,
			'zoom_start': self.zoom_start,
			'zoom_end': self.zoom_end,
			'neon_coverage': self.neon_coverage,
			'subtitle_scale': self.subtitle_scale,
		}

#============================================

@dataclasses.dataclass(frozen=True)
class KeyframeEvent:
	kind: KeyframeKind
	scene_index: int
	frame: int
	time: float
	visual_properties: Optional[VisualProperties] = None

	def with_visual_properties(self, props: VisualProperties) -> 'KeyframeEvent':
		return dataclasses.replace(self, visual_properties=props)

	def to_dict(self) -> dict:
		props = None
		if self.visual_properties is not None:
			props = self.visual_properties.to_dict()
		return {
			'kind': self.kind.value,
			'scene_index': self.scene_index,
			'frame': self.frame,
			'time': self.time,
			'visual_properties': props,
		}

#============================================

@dataclasses.dataclass(frozen=True)
class TransitionSpec:
	"""
	Transition between scene from_scene and scene to_scene.

	params holds the per-kind extras, e.g. fade_out/black_hold/fade_in for
	a dip to black or direction for a wipe. It is a read-only mapping.
	"""
	kind: TransitionKind
	duration: float
	params: types.MappingProxyType = dataclasses.field(default_factory=dict, hash=False)
	from_scene: int = 0
	to_scene: int = 1

	def __post_init__(self):
		object.__setattr__(self, 'params', types.MappingProxyType(dict(self.params)))

	def to_dict(self) -> dict:
		data = {
			'kind': self.kind.value,
			'duration': self.duration,
			'from_scene': self.from_scene,
			'to_scene': self.to_scene,
		}
		data.update(self.params)
		return data

#============================================

@dataclasses.dataclass(frozen=True)
class VariantConfig:
	name: str
	platform: str = 'universal'
	contrast_multiplier: float = 1.0
	saturation_multiplier: float = 1.0
	transition_duration_multiplier: float = 1.0
	transition_style: Optional[TransitionKind] = None
	resolution: Optional[tuple] = None

	def validate(self) -> None:
		multipliers = {
			'contrast_multiplier': self.contrast_multiplier,
			'saturation_multiplier': self.saturation_multiplier,
			'transition_duration_multiplier': self.transition_duration_multiplier,
		}
		for key, value in multipliers.items():
			if value is None or value <= 0:
				raise ConfigurationError(f"variant {self.name}: {key} must be positive")
		if self.resolution is not None:
			if len(self.resolution) != 2:
				raise ConfigurationError(f"variant {self.name}: resolution must be [width, height]")
			if int(self.resolution[0]) <= 0 or int(self.resolution[1]) <= 0:
				raise ConfigurationError(f"variant {self.name}: resolution must be positive")

	def to_dict(self) -> dict:
		style = None
		if self.transition_style is not None:
			style = self.transition_style.value
		resolution = None
		if self.resolution is not None:
			resolution = [int(self.resolution[0]), int(self.resolution[1])]
		return {
			'name': self.name,
			'platform': self.platform,
			'contrast_multiplier': self.contrast_multiplier,
			'saturation_multiplier': self.saturation_multiplier,
			'transition_duration_multiplier': self.transition_duration_multiplier,
			'transition_style': style,
			'resolution': resolution,
		}

#============================================

@dataclasses.dataclass(frozen=True)
class GenerationConfig:
	fps: Fraction = Fraction(30, 1)
	min_duration: float = 10.0
	max_duration: float = 20.0
	resolution: tuple = (1920, 1080)
	include_bookends: bool = False

	def __post_init__(self):
		object.__setattr__(self, 'fps', utils.parse_fps(self.fps))

	def validate(self) -> None:
		if self.fps is None or self.fps <= 0:
			raise ConfigurationError("fps must be positive")
		if self.min_duration < 0 or self.max_duration < 0:
			raise ConfigurationError("segment durations must not be negative")
		if self.min_duration > self.max_duration:
			raise ConfigurationError("min_duration must not exceed max_duration")
		if len(self.resolution) != 2:
			raise ConfigurationError("resolution must be [width, height]")
		if int(self.resolution[0]) <= 0 or int(self.resolution[1]) <= 0:
			raise ConfigurationError("resolution must be positive")

#============================================

@dataclasses.dataclass(frozen=True)
class StructureMetadata:
	total_duration: float
	scene_count: int
	keyframe_count: int
	fps: float
	resolution: tuple
	aspect_ratio: str
	variant_id: Optional[int] = None
	variant_name: Optional[str] = None
	platform: Optional[str] = None

	def to_dict(self) -> dict:
		data = {
			'total_duration': self.total_duration,
			'scene_count': self.scene_count,
			'keyframe_count': self.keyframe_count,
			'fps': self.fps,
			'resolution': [int(self.resolution[0]), int(self.resolution[1])],
			'aspect_ratio': self.aspect_ratio,
		}
		if self.variant_id is not None:
			data['variant_id'] = self.variant_id
			data['variant_name'] = self.variant_name
			data['platform'] = self.platform
		return data

#============================================

@dataclasses.dataclass(frozen=True)
class GeneratedStructure:
	scenes: tuple
	keyframes: tuple
	transitions: tuple
	metadata: StructureMetadata
	variant: Optional[VariantConfig] = None

	def to_dict(self) -> dict:
		data = {
			'metadata': self.metadata.to_dict(),
			'scenes': [
				{
					'index': index,
					'start_time': scene.start_time,
					'end_time': scene.end_time,
					'duration': scene.duration,
					'text': scene.text,
					'description': scene.description,
				}
				for index, scene in enumerate(self.scenes)
			],
			'keyframes': [event.to_dict() for event in self.keyframes],
			'transitions': [transition.to_dict() for transition in self.transitions],
		}
		if self.variant is not None:
			data['variant'] = self.variant.to_dict()
		return data
