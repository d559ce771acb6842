"""Domain models and value objects."""
