"""Shared types, configuration, errors and process helpers."""
