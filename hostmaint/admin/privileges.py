"""Effective privilege checks."""
import os


def is_root() -> bool:
    """True when running with effective uid 0."""
    return os.geteuid() == 0
