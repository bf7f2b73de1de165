"""Collectors for host metrics and processes."""
