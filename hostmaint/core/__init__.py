"""Core evaluation logic and error types."""
