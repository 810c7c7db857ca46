"""Adapters for tabular sources and catalog storage."""
