"""Application layer: ports (interfaces) and services."""
