"""Rendering and file export (requires CadQuery)."""
