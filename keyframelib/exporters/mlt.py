#!/usr/bin/env python3

import os
from fractions import Fraction
import lxml.etree
from keyframelib.core import utils
from keyframelib.core.visuals import NarrativeRole
from keyframelib.core.visuals import role_for

#============================================

MARKER_COLORS = {
	NarrativeRole.HOOK: '#bf616a',
	NarrativeRole.TRANSITION: '#88c0d0',
	NarrativeRole.COMPLETION: '#a3be8c',
}
SCENE_COLORS = ('#2e3440', '#3b4252')

#============================================

def fps_fraction(fps: float) -> Fraction:
	return Fraction(str(fps)).limit_denominator(1001)

#============================================
class MltMarkerExporter():
	"""
	Write a GeneratedStructure as an MLT XML timeline.

	Each scene becomes a colour producer on one playlist, gaps between
	scenes become blanks, and keyframes are stored as shotcut:markers on
	the tractor so editors show them on the ruler.
	"""
	def __init__(self, structure, output_file: str):
		self.structure = structure
		self.output_file = output_file
		self.fps = fps_fraction(structure.metadata.fps)
		self.producer_counter = 0
		self.root = None

	#============================
	def export(self) -> None:
		self.root = self.build()
		self._write_output()

	#============================
	def build(self):
		self.producer_counter = 0
		self.root = lxml.etree.Element('mlt')
		self.root.set('LC_NUMERIC', 'C')
		self._emit_profile()
		self._emit_playlist('scenes')
		self._emit_tractor('scenes')
		return self.root

	#============================
	def _emit_profile(self) -> None:
		(width, height) = self.structure.metadata.resolution
		(display_num, display_den) = utils.reduce_fraction(width, height)
		profile = lxml.etree.SubElement(self.root, 'profile')
		profile.set('description', 'keyframes')
		profile.set('width', str(width))
		profile.set('height', str(height))
		profile.set('progressive', '1')
		profile.set('sample_aspect_num', '1')
		profile.set('sample_aspect_den', '1')
		profile.set('display_aspect_num', str(display_num))
		profile.set('display_aspect_den', str(display_den))
		profile.set('frame_rate_num', str(self.fps.numerator))
		profile.set('frame_rate_den', str(self.fps.denominator))
		profile.set('colorspace', '709')

	#============================
	def _emit_playlist(self, playlist_id: str) -> None:
		# producers must precede the playlist that references them
		playlist_elem = lxml.etree.Element('playlist')
		playlist_elem.set('id', playlist_id)
		cursor = 0
		for index, scene in enumerate(self.structure.scenes):
			start_frame = utils.frames_from_seconds(scene.start_time, self.fps)
			end_frame = utils.frames_from_seconds(scene.end_time, self.fps)
			if start_frame > cursor:
				self._emit_blank_entry(playlist_elem, start_frame - cursor)
				cursor = start_frame
			# scenes shorter than a frame still get one frame
			duration_frames = max(1, end_frame - cursor)
			producer_id = self._emit_color_producer(index, scene, duration_frames)
			playlist_entry = lxml.etree.SubElement(playlist_elem, 'entry')
			playlist_entry.set('producer', producer_id)
			playlist_entry.set('in', '0')
			playlist_entry.set('out', str(duration_frames - 1))
			cursor += duration_frames
		self.root.append(playlist_elem)

	#============================
	def _emit_blank_entry(self, playlist_elem, duration_frames: int) -> None:
		blank_elem = lxml.etree.SubElement(playlist_elem, 'blank')
		blank_elem.set('length', str(duration_frames))

	#============================
	def _emit_color_producer(self, index: int, scene, duration_frames: int) -> str:
		producer_id = self._next_producer_id('scene')
		producer = lxml.etree.SubElement(self.root, 'producer')
		producer.set('id', producer_id)
		self._set_property(producer, 'mlt_service', 'color')
		self._set_property(producer, 'resource', SCENE_COLORS[index % len(SCENE_COLORS)])
		self._set_property(producer, 'length', str(duration_frames))
		self._set_property(producer, 'out', str(duration_frames - 1))
		self._set_property(producer, 'shotcut:caption', f"Scene {index + 1}")
		self._set_property(producer, 'keyframe:scene_index', str(index))
		self._set_property(producer, 'keyframe:text', scene.text)
		if scene.description != '':
			self._set_property(producer, 'keyframe:description', scene.description)
		return producer_id

	#============================
	def _emit_tractor(self, playlist_id: str) -> None:
		tractor = lxml.etree.SubElement(self.root, 'tractor')
		tractor.set('id', 'tractor0')
		self._set_property(tractor, 'keyframe:version', '1')
		metadata = self.structure.metadata
		if metadata.variant_id is not None:
			self._set_property(tractor, 'keyframe:variant_id', str(metadata.variant_id))
			self._set_property(tractor, 'keyframe:variant_name', metadata.variant_name)
		for transition in self.structure.transitions:
			name = f"keyframe:transition.{transition.from_scene}"
			value = f"{transition.kind.value} {transition.duration:.3f}"
			self._set_property(tractor, name, value)
		self._emit_markers(tractor)
		multitrack = lxml.etree.SubElement(tractor, 'multitrack')
		track_elem = lxml.etree.SubElement(multitrack, 'track')
		track_elem.set('producer', playlist_id)

	#============================
	def _emit_markers(self, tractor) -> None:
		scene_count = self.structure.metadata.scene_count
		markers = lxml.etree.SubElement(tractor, 'properties')
		markers.set('name', 'shotcut:markers')
		for number, event in enumerate(self.structure.keyframes):
			role = role_for(event.scene_index, event.kind, scene_count)
			timestamp = utils.format_timestamp(
				utils.seconds_from_frames(event.frame, self.fps))
			marker = lxml.etree.SubElement(markers, 'properties')
			marker.set('name', str(number))
			self._set_property(marker, 'text',
				f"{event.kind.value} {event.scene_index + 1} ({role.value})")
			self._set_property(marker, 'start', timestamp)
			self._set_property(marker, 'end', timestamp)
			self._set_property(marker, 'color', MARKER_COLORS[role])

	#============================
	def _set_property(self, parent, name: str, value: str) -> None:
		prop = lxml.etree.SubElement(parent, 'property')
		prop.set('name', name)
		prop.text = value

	#============================
	def _next_producer_id(self, prefix: str) -> str:
		self.producer_counter += 1
		return f"{prefix}_{self.producer_counter:04d}"

	#============================
	def _write_output(self) -> None:
		os.makedirs(os.path.dirname(self.output_file) or '.', exist_ok=True)
		tree = lxml.etree.ElementTree(self.root)
		tree.write(self.output_file, encoding='utf-8', xml_declaration=True,
			pretty_print=True)
