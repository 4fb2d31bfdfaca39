"""Model Context Protocol tool server."""
