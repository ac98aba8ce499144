"""Rendering, validation and description helpers."""
