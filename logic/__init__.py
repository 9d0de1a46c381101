"""Indexing, facet counting and search logic."""
