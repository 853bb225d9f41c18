"""Helpers shared across domains."""
