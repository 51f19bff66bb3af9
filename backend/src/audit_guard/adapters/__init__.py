"""Adapters for external scoring providers."""
