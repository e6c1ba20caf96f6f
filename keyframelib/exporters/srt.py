#!/usr/bin/env python3

"""
Annotated subtitle export.

Writes the original subtitle cues back out in SRT form, prefixing the
first cue of every scene with a scene tag and the transition that leads
into it.
"""

# Standard Library
import os

# local repo modules
from keyframelib.core import utils

#============================================

def _scene_for_entry(entry, scenes, start_index: int) -> int:
	index = start_index
	while index + 1 < len(scenes) and entry.start_time >= scenes[index + 1].start_time:
		index += 1
	return index

#============================================

def build_annotated_srt(structure, entries) -> str:
	"""
	Build annotated SRT text.

	Args:
		structure: GeneratedStructure produced from entries.
		entries: SubtitleEntry sequence the structure was segmented from.

	Returns:
		str: SRT text.
	"""
	scenes = list(structure.scenes)
	incoming = {}
	for transition in structure.transitions:
		incoming[transition.to_scene] = transition
	blocks = []
	scene_index = 0
	tagged = set()
	for number, entry in enumerate(entries, start=1):
		scene_index = _scene_for_entry(entry, scenes, scene_index)
		lines = []
		if scene_index not in tagged:
			tagged.add(scene_index)
			tag = f"[SCENE {scene_index + 1}/{len(scenes)}"
			transition = incoming.get(scene_index)
			if transition is not None:
				tag += f" | {transition.kind.value} {transition.duration:.2f}s"
			tag += "]"
			lines.append(tag)
			description = scenes[scene_index].description
			if description != '':
				lines.append(f"[{description}]")
		lines.append(entry.text)
		timing = (f"{utils.format_srt_timecode(entry.start_time)} --> "
			f"{utils.format_srt_timecode(entry.end_time)}")
		blocks.append("\n".join([str(number), timing] + lines))
	return "\n\n".join(blocks) + "\n"

#============================================

def write_annotated_srt(structure, entries, output_file: str) -> None:
	text = build_annotated_srt(structure, entries)
	os.makedirs(os.path.dirname(output_file) or '.', exist_ok=True)
	with open(output_file, 'w', encoding='utf-8') as handle:
		handle.write(text)
	return
