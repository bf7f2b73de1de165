"""Host administration actions wrapping OS utilities."""
