#!/usr/bin/env python3

import json
import os
import yaml

#============================================

def structure_to_record(structure) -> dict:
	return structure.to_dict()

#============================================

def _prepare_dir(output_file: str) -> None:
	os.makedirs(os.path.dirname(output_file) or '.', exist_ok=True)
	return

#============================================

def write_json(structure, output_file: str) -> None:
	_prepare_dir(output_file)
	with open(output_file, 'w', encoding='utf-8') as handle:
		json.dump(structure_to_record(structure), handle, indent=2)
		handle.write("\n")
	return

#============================================

def write_yaml(structure, output_file: str) -> None:
	_prepare_dir(output_file)
	with open(output_file, 'w', encoding='utf-8') as handle:
		yaml.safe_dump(structure_to_record(structure), handle, sort_keys=False,
			allow_unicode=True)
	return
