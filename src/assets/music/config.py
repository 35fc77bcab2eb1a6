"""Run configuration for the music report assets."""

import dagster as dg
from pydantic import Field

from src.utils.outliers import DEFAULT_CLASSIFICATION_THRESHOLD, DEFAULT_SURFACE_THRESHOLD


class TopNConfig(dg.Config):
    """Configuration for top-N report assets.

    Parameters
    ----------
    limit : int | None, optional
        Maximum number of rows in the report. Each report falls back to its own default when unset.
    """

    limit: int | None = Field(default=None, ge=1, description="Maximum number of rows in the report")

    def resolve_limit(self, default: int) -> int:
        """Return the configured limit, or ``default`` when unset."""
        return self.limit if self.limit is not None else default


class OutlierAnalysisConfig(dg.Config):
    """Configuration for the streaming outlier analysis.

    Parameters
    ----------
    metric : str, optional
        Numeric track column to score, by default ``stream``.
    classification_threshold : float, optional
        Absolute z-score beyond which a track is an exceptional success or below average.
    surface_threshold : float, optional
        Absolute z-score beyond which a track is included in the report.
    limit : int, optional
        Maximum number of reported tracks.
    """

    metric: str = Field(default="stream", description="Numeric track column to score")
    classification_threshold: float = Field(default=DEFAULT_CLASSIFICATION_THRESHOLD, gt=0)
    surface_threshold: float = Field(default=DEFAULT_SURFACE_THRESHOLD, ge=0)
    limit: int = Field(default=20, ge=1)
