#!/usr/bin/env python3

#============================================

class KeyframeError(RuntimeError):
	"""Base class for keyframe generation failures."""

#============================================

class InputError(KeyframeError):
	"""Empty or missing subtitle/scene sequence."""

#============================================

class MalformedEntryError(KeyframeError):
	"""A subtitle or scene entry has invalid timing."""

#============================================

class ConfigurationError(KeyframeError):
	"""Invalid generation parameters."""
