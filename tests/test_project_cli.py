#!/usr/bin/env python3

"""
Unit tests for the project facade and command line wrapper.
"""

# Standard Library
import json
import os
import sys

import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

import keyframe_cli
from keyframe_fixtures import TUTORIAL_SRT
from keyframe_fixtures import write_text_file
from keyframelib.core import utils
from keyframelib.core.models import GeneratedStructure
from keyframelib.core.project import KeyframeProject
from keyframelib.core.project import guess_format
from keyframelib.core.project import variant_output_path
from keyframelib.core.variants import VariantBatch

#============================================

@pytest.fixture(autouse=True)
def quiet_mode():
	utils.set_quiet_mode(True)
	yield
	utils.set_quiet_mode(False)

#============================================

@pytest.fixture
def srt_file(tmp_path) -> str:
	path = tmp_path / "talk.srt"
	write_text_file(str(path), TUTORIAL_SRT)
	return str(path)

#============================================

def test_guess_format() -> None:
	assert guess_format("plan.mlt") == "mlt"
	assert guess_format("plan.YML") == "yaml"
	assert guess_format("plan.srt") == "srt"
	assert guess_format("plan.txt") == "json"

#============================================

def test_variant_output_path() -> None:
	assert variant_output_path("out/plan.json", 3) == "out/plan.variant-3.json"

#============================================

def test_project_single_run(srt_file) -> None:
	project = KeyframeProject(srt_file)
	result = project.run()
	assert isinstance(result, GeneratedStructure)
	assert result.metadata.scene_count == 2
	plan = project.plan()
	assert plan['entry_count'] == 3
	assert plan['scenes'][1]['start'] == "00:00:13.000"

#============================================

def test_project_variants_from_config(srt_file, tmp_path) -> None:
	config_path = tmp_path / "keyframes.yaml"
	write_text_file(str(config_path), "\n".join([
		"keyframes: 1",
		"profile: {fps: 24, resolution: [1280, 720]}",
		"variants:",
		"  - {name: One, contrast: 1.1}",
		"  - {name: Two, transition_style: wipe}",
		"",
	]))
	project = KeyframeProject(srt_file, config_file=str(config_path))
	result = project.run()
	assert isinstance(result, VariantBatch)
	assert [s.metadata.variant_name for s in result.structures] == ["One", "Two"]
	assert result.structures[0].keyframes[0].frame == 312
	assert result.structures[1].transitions[0].kind.value == "wipe"

#============================================

def test_project_variant_count_pads_config_list(srt_file, tmp_path) -> None:
	config_path = tmp_path / "keyframes.yaml"
	write_text_file(str(config_path), "\n".join([
		"keyframes: 1",
		"variants:",
		"  - {name: One, contrast: 1.1}",
		"  - {name: Two, transition_style: wipe}",
		"",
	]))
	first = KeyframeProject(srt_file, config_file=str(config_path),
		variant_count=5, seed=1).run()
	second = KeyframeProject(srt_file, config_file=str(config_path),
		variant_count=5, seed=1).run()
	assert len(first.structures) == 5
	names = [s.metadata.variant_name for s in first.structures]
	assert names == ["One", "Two", "Random 3", "Random 4", "Random 5"]
	assert first == second
	trimmed = KeyframeProject(srt_file, config_file=str(config_path), variant_count=1)
	assert [variant.name for variant in trimmed.variants] == ["One"]

#============================================

def test_project_describer(srt_file) -> None:
	project = KeyframeProject(srt_file, describer=lambda text, index, total: f"shot {index}")
	assert [scene.description for scene in project.scenes] == ["shot 0", "shot 1"]

#============================================

def test_cli_writes_variant_files(srt_file, tmp_path, monkeypatch) -> None:
	output_file = tmp_path / "plan.json"
	monkeypatch.setattr(sys, "argv", [
		"keyframe_cli.py", "-s", srt_file, "-o", str(output_file),
		"-n", "4", "--seed", "11", "-q",
	])
	keyframe_cli.main()
	for variant_id in range(4):
		path = tmp_path / f"plan.variant-{variant_id}.json"
		assert path.exists()
		with open(path, 'r', encoding='utf-8') as handle:
			data = json.load(handle)
		assert data['metadata']['variant_id'] == variant_id
	with open(tmp_path / "plan.variant-3.json", 'r', encoding='utf-8') as handle:
		assert json.load(handle)['metadata']['variant_name'] == "Random 4"

#============================================

def test_cli_dump_plan(srt_file, monkeypatch, capsys) -> None:
	monkeypatch.setattr(sys, "argv", ["keyframe_cli.py", "-s", srt_file, "-p"])
	keyframe_cli.main()
	captured = capsys.readouterr()
	assert "entry_count: 3" in captured.out
