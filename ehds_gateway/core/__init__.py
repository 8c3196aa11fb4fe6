"""Core gateway logic: resource registry, validation, resolution and serialization."""
