"""Shared utilities and telemetry used across layers."""
