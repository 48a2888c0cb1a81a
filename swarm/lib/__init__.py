"""Shared building blocks: codec, schema validation, configuration."""
