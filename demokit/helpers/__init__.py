"""Git helpers."""
