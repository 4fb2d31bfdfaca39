"""Domain models: value objects and immutable records passed between layers."""
