"""GUI helpers."""
