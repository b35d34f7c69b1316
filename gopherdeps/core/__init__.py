"""Core infrastructure: config, runtime state, enums, fallbacks."""
