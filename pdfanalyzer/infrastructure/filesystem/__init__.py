"""Local file system access."""
