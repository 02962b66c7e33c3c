"""Command-line entry points for lazy-pager."""
from .main import main

__all__ = ["main"]
