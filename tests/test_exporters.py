#!/usr/bin/env python3

"""
Tests for structure exporters.
"""

# Standard Library
import json
import os
import sys
import tempfile
import unittest
import xml.etree.ElementTree

# PIP3 modules
import yaml

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from keyframe_fixtures import tutorial_entries
from keyframelib.core import describe
from keyframelib.core.generator import build_structure
from keyframelib.core.generator import generate_structure
from keyframelib.core.models import GenerationConfig
from keyframelib.core.models import Scene
from keyframelib.core.variants import DEFAULT_VARIANTS
from keyframelib.exporters import records
from keyframelib.exporters import srt
from keyframelib.exporters.mlt import MltMarkerExporter

#============================================

class MltExportTest(unittest.TestCase):
	#============================================
	def test_scenes_and_markers(self) -> None:
		"""Each scene is a producer and each keyframe a marker."""
		structure = build_structure(tutorial_entries(),
			GenerationConfig(include_bookends=True))
		with tempfile.TemporaryDirectory() as temp_dir:
			mlt_file = os.path.join(temp_dir, "plan.mlt")
			MltMarkerExporter(structure, mlt_file).export()
			root = xml.etree.ElementTree.parse(mlt_file).getroot()
		profile = root.find('profile')
		self.assertEqual(profile.get('frame_rate_num'), '30')
		self.assertEqual(profile.get('frame_rate_den'), '1')
		self.assertEqual(profile.get('display_aspect_num'), '16')
		producers = root.findall('producer')
		self.assertEqual(len(producers), 2)
		entries = root.find('playlist').findall('entry')
		self.assertEqual([entry.get('out') for entry in entries], ['389', '89'])
		markers = root.find("tractor/properties[@name='shotcut:markers']")
		self.assertEqual(len(markers.findall('properties')), 4)
		first = markers.find('properties')
		texts = {prop.get('name'): prop.text for prop in first.findall('property')}
		self.assertEqual(texts['start'], "00:00:00.000")
		self.assertIn("hook", texts['text'])
		transition_props = [prop for prop in root.find('tractor').findall('property')
			if prop.get('name', '').startswith('keyframe:transition.')]
		self.assertEqual(transition_props[0].text, "dip_to_black 0.700")

	#============================================
	def test_gap_becomes_blank(self) -> None:
		scenes = (
			Scene(text="a b c", start_time=0.0, end_time=2.0),
			Scene(text="a b c", start_time=3.0, end_time=5.0),
		)
		structure = generate_structure(scenes, GenerationConfig(fps=25))
		exporter = MltMarkerExporter(structure, "unused.mlt")
		root = exporter.build()
		playlist = root.find('playlist')
		children = [child.tag for child in playlist]
		self.assertEqual(children, ['entry', 'blank', 'entry'])
		self.assertEqual(playlist.find('blank').get('length'), '25')

	#============================================
	def test_sub_frame_scene_keeps_one_frame(self) -> None:
		scenes = (
			Scene(text="a b c", start_time=0.0, end_time=2.0),
			Scene(text="a b c", start_time=2.0, end_time=2.01),
			Scene(text="x y z", start_time=2.01, end_time=4.0),
		)
		structure = generate_structure(scenes, GenerationConfig(fps=25))
		root = MltMarkerExporter(structure, "unused.mlt").build()
		self.assertEqual(len(root.findall('producer')), 3)
		entries = root.find('playlist').findall('entry')
		self.assertEqual([entry.get('out') for entry in entries], ['49', '0', '48'])

	#============================================
	def test_variant_tags(self) -> None:
		scenes = build_structure(tutorial_entries()).scenes
		structure = generate_structure(scenes, GenerationConfig(), DEFAULT_VARIANTS[2], 2)
		root = MltMarkerExporter(structure, "unused.mlt").build()
		profile = root.find('profile')
		self.assertEqual(profile.get('width'), '1080')
		self.assertEqual(profile.get('height'), '1920')
		props = {prop.get('name'): prop.text for prop in root.find('tractor').findall('property')}
		self.assertEqual(props['keyframe:variant_id'], '2')
		self.assertEqual(props['keyframe:variant_name'], 'Aggressive')

#============================================

class RecordExportTest(unittest.TestCase):
	#============================================
	def test_json_and_yaml_match(self) -> None:
		structure = build_structure(tutorial_entries())
		with tempfile.TemporaryDirectory() as temp_dir:
			json_file = os.path.join(temp_dir, "out", "plan.json")
			yaml_file = os.path.join(temp_dir, "plan.yaml")
			records.write_json(structure, json_file)
			records.write_yaml(structure, yaml_file)
			with open(json_file, 'r', encoding='utf-8') as handle:
				json_data = json.load(handle)
			with open(yaml_file, 'r', encoding='utf-8') as handle:
				yaml_data = yaml.safe_load(handle)
		self.assertEqual(json_data, yaml_data)
		self.assertEqual(json_data['metadata']['keyframe_count'], 2)
		self.assertEqual(json_data['metadata']['resolution'], [1920, 1080])

#============================================

class AnnotatedSrtTest(unittest.TestCase):
	#============================================
	def test_scene_tags(self) -> None:
		entries = tutorial_entries()
		structure = build_structure(entries)
		text = srt.build_annotated_srt(structure, entries)
		blocks = text.strip().split("\n\n")
		self.assertEqual(len(blocks), 3)
		self.assertEqual(blocks[0].split("\n")[:3],
			["1", "00:00:00,000 --> 00:00:03,500", "[SCENE 1/2]"])
		self.assertNotIn("[SCENE", blocks[1])
		self.assertEqual(blocks[2].split("\n")[2], "[SCENE 2/2 | dip_to_black 0.70s]")
		self.assertEqual(blocks[2].split("\n")[3], "That's the plan.")

	#============================================
	def test_descriptions_are_included(self) -> None:
		entries = tutorial_entries()
		structure = build_structure(entries)
		scenes = describe.fill_descriptions(structure.scenes)
		structure = generate_structure(scenes, GenerationConfig())
		with tempfile.TemporaryDirectory() as temp_dir:
			srt_file = os.path.join(temp_dir, "annotated.srt")
			srt.write_annotated_srt(structure, entries, srt_file)
			with open(srt_file, 'r', encoding='utf-8') as handle:
				text = handle.read()
		self.assertIn("[Scene 2 of 2: That's the plan.]", text)

#============================================

def main() -> None:
	"""Run the unit tests."""
	unittest.main()

#============================================

if __name__ == "__main__":
	main()
