"""Registry for data quality checks."""

from . import track_checks

__all__ = ["track_checks"]
