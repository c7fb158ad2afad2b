"""Utility modules."""

from casa.utils.dates import years_before

__all__ = ["years_before"]
