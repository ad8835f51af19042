"""Configuration, errors and save policies."""
