#!/usr/bin/env python3

import os
from keyframelib.core import describe
from keyframelib.core import loader
from keyframelib.core import utils
from keyframelib.core.generator import generate_structure
from keyframelib.core.segmenter import segment_scenes
from keyframelib.core.variants import default_variant_configs
from keyframelib.core.variants import expand_variants
from keyframelib.core.variants import make_rng
from keyframelib.core.variants import pad_variant_configs
from keyframelib.exporters import mlt
from keyframelib.exporters import records
from keyframelib.exporters import srt

#============================================

EXPORT_FORMATS = ('json', 'yaml', 'mlt', 'srt')

#============================================

class KeyframeProject():
	def __init__(self, subtitle_file: str, config_file: str = None,
		variant_count: int = 0, seed: int = None, describer=None):
		self.subtitle_file = subtitle_file
		self.config_file = config_file
		config_data = loader.default_config()
		config_path = '<defaults>'
		if config_file is not None:
			config_data = loader.load_config(config_file)
			config_path = config_file
		self.config = loader.build_generation_config(config_data, config_path)
		self.variants = loader.build_variant_configs(config_data, config_path)
		if variant_count > 0 and len(self.variants) == 0:
			self.variants = default_variant_configs(variant_count, make_rng(seed))
		elif variant_count > 0:
			self.variants = pad_variant_configs(self.variants, variant_count, make_rng(seed))
		self.entries = loader.load_subtitles(subtitle_file)
		scenes = segment_scenes(self.entries, self.config.min_duration,
			self.config.max_duration)
		if describer is not None:
			scenes = describe.fill_descriptions(scenes, describer)
		self.scenes = scenes

	#============================
	def run(self):
		"""
		Generate the single structure, or a VariantBatch when variants
		are configured.
		"""
		if len(self.variants) > 0:
			return expand_variants(self.scenes, self.config, self.variants)
		return generate_structure(self.scenes, self.config)

	#============================
	def plan(self) -> dict:
		return {
			'subtitle_file': self.subtitle_file,
			'entry_count': len(self.entries),
			'scenes': [
				{
					'index': index,
					'start': utils.format_timestamp(scene.start_time),
					'end': utils.format_timestamp(scene.end_time),
					'text': scene.text,
				}
				for index, scene in enumerate(self.scenes)
			],
		}

	#============================
	def export(self, structure, output_file: str, fmt: str = None) -> str:
		if fmt is None:
			fmt = guess_format(output_file)
		if fmt == 'json':
			records.write_json(structure, output_file)
		elif fmt == 'yaml':
			records.write_yaml(structure, output_file)
		elif fmt == 'mlt':
			mlt.MltMarkerExporter(structure, output_file).export()
		elif fmt == 'srt':
			srt.write_annotated_srt(structure, self.entries, output_file)
		else:
			raise ValueError(f"unsupported export format: {fmt}")
		return output_file

#============================================

def guess_format(output_file: str) -> str:
	ext = os.path.splitext(output_file)[1].lower().lstrip('.')
	if ext == 'yml':
		ext = 'yaml'
	if ext not in EXPORT_FORMATS:
		return 'json'
	return ext

#============================================

def variant_output_path(output_file: str, variant_id: int) -> str:
	base, ext = os.path.splitext(output_file)
	return f"{base}.variant-{variant_id}{ext}"
