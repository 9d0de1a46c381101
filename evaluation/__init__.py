"""Deterministic search evaluation scenarios."""
