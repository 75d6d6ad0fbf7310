"""Concurrent tree walking and value classification."""
