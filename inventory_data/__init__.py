"""Data loading and transformation layer for the housing inventory dashboard."""
