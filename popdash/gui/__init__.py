"""Desktop dashboard (PySide6)."""
