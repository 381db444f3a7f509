"""Embedding extractors. Implementations import their model libraries on load."""
