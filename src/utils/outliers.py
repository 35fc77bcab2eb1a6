"""Z-score based outlier detection over a single numeric column."""

import polars as pl
from loguru import logger

from src.utils.errors import EmptyDatasetError, ZeroVarianceError

DEFAULT_CLASSIFICATION_THRESHOLD = 2.0
DEFAULT_SURFACE_THRESHOLD = 1.5

EXCEPTIONAL_SUCCESS = "Exceptional Success"
BELOW_AVERAGE = "Below Average Performance"
NORMAL_PERFORMANCE = "Normal Performance"


def column_mean_and_std(df: pl.DataFrame, column: str) -> tuple[float, float]:
    """
    Compute the mean and sample standard deviation (N-1) of a column.

    Parameters
    ----------
    df : pl.DataFrame
        Records holding the column.
    column : str
        Numeric column name.

    Returns
    -------
    tuple[float, float]
        The mean and the standard deviation.

    Raises
    ------
    EmptyDatasetError
        If the column has no non-null values.
    ZeroVarianceError
        If the standard deviation is zero or undefined (a single value).
    """
    values = df.get_column(column).drop_nulls().cast(pl.Float64)
    if values.len() == 0:
        raise EmptyDatasetError(f"No values in column '{column}' to compute a z-score over")

    # Constant float columns keep a tiny non-zero std after rounding
    if values.min() == values.max():
        raise ZeroVarianceError(f"Column '{column}' holds a single distinct value; z-scores are undefined")

    mean = values.mean()
    std = values.std(ddof=1)
    if std is None or std == 0:
        raise ZeroVarianceError(f"Standard deviation of column '{column}' is {std}; z-scores are undefined")

    return mean, std


def score_outliers(
    df: pl.DataFrame,
    column: str,
    classification_threshold: float = DEFAULT_CLASSIFICATION_THRESHOLD,
) -> pl.DataFrame:
    """
    Add z-scores and a performance category for every record.

    The mean and standard deviation are computed once over the full frame.

    Parameters
    ----------
    df : pl.DataFrame
        Records to score.
    column : str
        Numeric column to score.
    classification_threshold : float, optional
        ``z > threshold`` is an exceptional success, ``z < -threshold`` a below average performance.

    Returns
    -------
    pl.DataFrame
        ``df`` with ``dataset_avg``, ``z_score`` and ``performance_category`` columns.
    """
    mean, std = column_mean_and_std(df, column)
    logger.info(f"Scoring '{column}' against mean={mean:.2f}, std={std:.2f}")

    z_score = (pl.col(column).cast(pl.Float64) - mean) / std
    return df.with_columns(
        dataset_avg=pl.lit(mean),
        z_score=z_score,
    ).with_columns(
        performance_category=pl.when(pl.col("z_score") > classification_threshold)
        .then(pl.lit(EXCEPTIONAL_SUCCESS))
        .when(pl.col("z_score") < -classification_threshold)
        .then(pl.lit(BELOW_AVERAGE))
        .otherwise(pl.lit(NORMAL_PERFORMANCE)),
    )


def surface_outliers(scored: pl.DataFrame, surface_threshold: float = DEFAULT_SURFACE_THRESHOLD) -> pl.DataFrame:
    """Keep scored records whose absolute z-score exceeds ``surface_threshold``, highest first."""
    return scored.filter(pl.col("z_score").abs() > surface_threshold).sort("z_score", descending=True)


def detect_outliers(
    df: pl.DataFrame,
    column: str,
    classification_threshold: float = DEFAULT_CLASSIFICATION_THRESHOLD,
    surface_threshold: float = DEFAULT_SURFACE_THRESHOLD,
    limit: int | None = None,
) -> pl.DataFrame:
    """
    Score every record and return the ones worth reporting.

    Parameters
    ----------
    df : pl.DataFrame
        Records to score.
    column : str
        Numeric column to score.
    classification_threshold : float, optional
        Threshold used for ``performance_category``, by default 2.0.
    surface_threshold : float, optional
        Absolute z-score above which a record is reported, by default 1.5.
    limit : int | None, optional
        Maximum number of surfaced records.

    Returns
    -------
    pl.DataFrame
        Surfaced records ordered by z-score descending.
    """
    surfaced = surface_outliers(score_outliers(df, column, classification_threshold), surface_threshold)
    if limit is not None:
        surfaced = surfaced.head(limit)
    return surfaced
