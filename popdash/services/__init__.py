"""Application services shared by the CLI and GUI."""
