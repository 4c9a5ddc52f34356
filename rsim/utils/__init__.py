"""Small shared helpers."""

from .numbers import coerce_count, safe_ratio

__all__ = ["coerce_count", "safe_ratio"]
