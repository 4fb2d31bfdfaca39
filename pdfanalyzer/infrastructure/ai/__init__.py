"""Remote model clients."""
