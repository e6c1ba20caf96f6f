#!/usr/bin/env python3

import dataclasses
import os
import concurrent.futures
import numpy
from tqdm import tqdm
from keyframelib.core import utils
from keyframelib.core.errors import InputError
from keyframelib.core.errors import KeyframeError
from keyframelib.core.generator import generate_structure
from keyframelib.core.models import GenerationConfig
from keyframelib.core.models import VariantConfig

#============================================

DEFAULT_VARIANTS = (
	VariantConfig(
		name='Conservative',
		platform='youtube',
		contrast_multiplier=0.85,
		saturation_multiplier=0.9,
		transition_duration_multiplier=1.2,
		resolution=(1920, 1080),
	),
	VariantConfig(
		name='Balanced',
		platform='universal',
		contrast_multiplier=1.0,
		saturation_multiplier=1.0,
		transition_duration_multiplier=1.0,
	),
	VariantConfig(
		name='Aggressive',
		platform='tiktok',
		contrast_multiplier=1.25,
		saturation_multiplier=1.2,
		transition_duration_multiplier=0.7,
		resolution=(1080, 1920),
	),
)

# uniform ranges for filler variants beyond the defaults
FILLER_CONTRAST_RANGE = (0.8, 1.3)
FILLER_SATURATION_RANGE = (0.8, 1.3)
FILLER_TRANSITION_RANGE = (0.6, 1.4)

#============================================

@dataclasses.dataclass(frozen=True)
class VariantFailure:
	variant_id: int
	config: VariantConfig
	error: Exception

#============================================

@dataclasses.dataclass(frozen=True)
class VariantBatch:
	"""
	Outcome of a variant expansion.

	structures keeps input order and skips failed variants; each failure
	records the variant_id it would have had.
	"""
	structures: tuple
	failures: tuple = ()

	@property
	def ok(self) -> bool:
		return len(self.failures) == 0

	def raise_for_failures(self) -> None:
		if len(self.failures) == 0:
			return
		first = self.failures[0]
		raise first.error

#============================================

def make_rng(seed: int = None) -> numpy.random.Generator:
	return numpy.random.default_rng(seed)

#============================================

def make_filler_variant(number: int, rng: numpy.random.Generator) -> VariantConfig:
	base = DEFAULT_VARIANTS[int(rng.integers(0, len(DEFAULT_VARIANTS)))]
	variant = VariantConfig(
		name=f"Random {number}",
		platform=base.platform,
		contrast_multiplier=round(float(rng.uniform(*FILLER_CONTRAST_RANGE)), 3),
		saturation_multiplier=round(float(rng.uniform(*FILLER_SATURATION_RANGE)), 3),
		transition_duration_multiplier=round(float(rng.uniform(*FILLER_TRANSITION_RANGE)), 3),
		resolution=base.resolution,
	)
	variant.validate()
	return variant

#============================================

def default_variant_configs(count: int, rng: numpy.random.Generator = None) -> list:
	"""
	Build count variant configs: the three fixed profiles first, then
	randomly parameterized fillers drawn from rng.

	Args:
		count: Number of configs wanted.
		rng: numpy Generator; pass a seeded one for reproducible fillers.

	Returns:
		list: VariantConfig objects.
	"""
	if count <= 0:
		raise InputError("variant count must be positive")
	configs = list(DEFAULT_VARIANTS[:count])
	if count > len(DEFAULT_VARIANTS):
		if rng is None:
			rng = make_rng()
		for number in range(len(DEFAULT_VARIANTS) + 1, count + 1):
			configs.append(make_filler_variant(number, rng))
	return configs

#============================================

def pad_variant_configs(configs, count: int, rng: numpy.random.Generator = None) -> list:
	"""
	Return exactly count configs: the first count of configs, topped up
	with random fillers when there are fewer.
	"""
	if count <= 0:
		raise InputError("variant count must be positive")
	padded = list(configs)[:count]
	if len(padded) < count and rng is None:
		rng = make_rng()
	for number in range(len(padded) + 1, count + 1):
		padded.append(make_filler_variant(number, rng))
	return padded

#============================================

def _worker_count(variant_count: int, max_workers: int = None) -> int:
	if max_workers is None:
		max_workers = os.cpu_count() or 1
	return max(1, min(variant_count, max_workers))

#============================================

def expand_variants(scenes, config: GenerationConfig = None, variants=None,
	max_workers: int = None, rng: numpy.random.Generator = None) -> VariantBatch:
	"""
	Run the full single-variant pipeline once per variant config.

	Variants run on a thread pool over the same immutable scene tuple.
	A failing variant is recorded in the batch failures without stopping
	its siblings.

	Args:
		scenes: Finalized Scene sequence shared by every variant.
		config: Base GenerationConfig.
		variants: VariantConfig list, or an int count for the defaults.
		max_workers: Thread cap, defaults to the CPU count.
		rng: numpy Generator for filler configs when variants is a count.

	Returns:
		VariantBatch: Structures in input order plus any failures.
	"""
	if scenes is None or len(scenes) == 0:
		raise InputError("at least one scene is required")
	if config is None:
		config = GenerationConfig()
	config.validate()
	if variants is None:
		variants = list(DEFAULT_VARIANTS)
	elif isinstance(variants, int):
		variants = default_variant_configs(variants, rng)
	variants = list(variants)
	if len(variants) == 0:
		raise InputError("at least one variant config is required")
	scenes = tuple(scenes)
	results = [None] * len(variants)
	errors = [None] * len(variants)
	workers = _worker_count(len(variants), max_workers)
	with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
		future_map = {}
		for variant_id, variant in enumerate(variants):
			future = executor.submit(generate_structure, scenes, config,
				variant, variant_id)
			future_map[future] = variant_id
		completed = concurrent.futures.as_completed(future_map)
		if not utils.is_quiet_mode():
			completed = tqdm(completed, total=len(future_map), desc="variants")
		for future in completed:
			variant_id = future_map[future]
			try:
				results[variant_id] = future.result()
			except KeyframeError as error:
				errors[variant_id] = error
	structures = []
	failures = []
	for variant_id, variant in enumerate(variants):
		if errors[variant_id] is not None:
			failures.append(VariantFailure(variant_id=variant_id, config=variant,
				error=errors[variant_id]))
			continue
		structures.append(results[variant_id])
	return VariantBatch(structures=tuple(structures), failures=tuple(failures))
