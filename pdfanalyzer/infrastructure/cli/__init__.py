"""Console rendering for the CLI."""
