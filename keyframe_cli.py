#!/usr/bin/env python3

import argparse
import yaml
from keyframelib.core import utils
from keyframelib.core.models import GeneratedStructure
from keyframelib.core.project import EXPORT_FORMATS
from keyframelib.core.project import KeyframeProject
from keyframelib.core.project import variant_output_path

#============================================

def parse_args():
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(description="Subtitle driven keyframe planner")
	parser.add_argument('-s', '--subtitles', dest='subtitle_file', required=True,
		help='subtitle file (SRT) with the narration timing')
	parser.add_argument('-c', '--config', dest='config_file',
		help='keyframe config yaml file')
	parser.add_argument('-o', '--output', dest='output_file',
		help='output file, format chosen from the extension')
	parser.add_argument('-f', '--format', dest='output_format', choices=EXPORT_FORMATS,
		help='force the output format')
	parser.add_argument('-n', '--variants', dest='variant_count', type=int, default=0,
		help='number of variants to generate')
	parser.add_argument('--seed', dest='seed', type=int,
		help='random seed for filler variants')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='suppress progress output')
	parser.add_argument('-p', '--dump-plan', dest='dump_plan', action='store_true',
		help='print the scene plan and exit')
	args = parser.parse_args()
	return args

#============================================

def print_summary(structure: GeneratedStructure) -> None:
	metadata = structure.metadata
	label = "base"
	if metadata.variant_id is not None:
		label = f"variant {metadata.variant_id} ({metadata.variant_name})"
	print(f"{label}: {metadata.scene_count} scenes, "
		f"{metadata.keyframe_count} keyframes, "
		f"{utils.format_timestamp(metadata.total_duration)} total")

#============================================

def main():
	args = parse_args()
	utils.set_quiet_mode(args.quiet)
	project = KeyframeProject(args.subtitle_file, config_file=args.config_file,
		variant_count=args.variant_count, seed=args.seed)
	if args.dump_plan:
		print(yaml.safe_dump(project.plan(), sort_keys=False, allow_unicode=True))
		return
	result = project.run()
	if isinstance(result, GeneratedStructure):
		structures = [result]
		failures = []
	else:
		structures = list(result.structures)
		failures = list(result.failures)
	for structure in structures:
		if not utils.is_quiet_mode():
			print_summary(structure)
		if args.output_file is None:
			continue
		output_file = args.output_file
		if structure.metadata.variant_id is not None:
			output_file = variant_output_path(args.output_file,
				structure.metadata.variant_id)
		project.export(structure, output_file, args.output_format)
		if not utils.is_quiet_mode():
			print(f"wrote {output_file}")
	for failure in failures:
		print(f"variant {failure.variant_id} ({failure.config.name}) failed: {failure.error}")
	if len(failures) > 0:
		raise SystemExit(1)


if __name__ == '__main__':
	main()
