"""Logging, events, file and validation helpers."""
