"""Generic grouped statistics over track frames."""

from collections.abc import Sequence

import polars as pl
from loguru import logger

from src.utils.errors import EmptyDatasetError

SUPPORTED_STATS = ("sum", "mean", "min", "max", "std")


def _stat_expr(column: str, stat: str) -> pl.Expr:
    """Build the aggregation expression for one column/statistic pair."""
    col = pl.col(column)
    if stat == "std":
        # Sample standard deviation (N-1), null for single-member groups
        return col.std(ddof=1).alias(f"{column}_std")
    return getattr(col, stat)().alias(f"{column}_{stat}")


def summarize_groups(
    df: pl.DataFrame,
    by: str | Sequence[str],
    columns: Sequence[str] = (),
    stats: Sequence[str] = ("mean",),
    sort_by: str | None = None,
    descending: bool = True,
    limit: int | None = None,
    min_count: int | None = None,
    include_percentage: bool = False,
    decimals: int | None = None,
) -> pl.DataFrame:
    """
    Group tracks by a key and compute summary statistics per group.

    Parameters
    ----------
    df : pl.DataFrame
        Track records.
    by : str | Sequence[str]
        Grouping column(s).
    columns : Sequence[str], optional
        Numeric columns to summarise.
    stats : Sequence[str], optional
        Statistics to compute for every column, any of ``sum``, ``mean``, ``min``, ``max``, ``std``.
        Output columns are named ``<column>_<stat>``.
    sort_by : str | None, optional
        Output column to sort by. Rows are returned in no particular order when omitted.
    descending : bool, optional
        Sort direction, by default True.
    limit : int | None, optional
        Keep only the first ``limit`` rows after sorting.
    min_count : int | None, optional
        Keep only groups with at least ``min_count`` tracks.
    include_percentage : bool, optional
        Add ``percentage_of_total`` (group count over total count x 100, rounded to 2 decimals).
    decimals : int | None, optional
        Round the computed statistics to this many decimals.

    Returns
    -------
    pl.DataFrame
        One row per distinct key with ``track_count`` and the requested statistics.

    Raises
    ------
    EmptyDatasetError
        If ``df`` has no rows.
    ValueError
        If a statistic is not supported or a column is missing.
    """
    keys = [by] if isinstance(by, str) else list(by)

    unknown_stats = [stat for stat in stats if stat not in SUPPORTED_STATS]
    if unknown_stats:
        raise ValueError(f"Unsupported statistics {unknown_stats}. Expected any of {SUPPORTED_STATS}")

    missing = [column for column in [*keys, *columns] if column not in df.columns]
    if missing:
        raise ValueError(f"Columns {missing} not found in frame")

    total = df.height
    if total == 0:
        raise EmptyDatasetError(f"Cannot summarise an empty frame grouped by {keys}")

    aggregations = [pl.len().alias("track_count")]
    aggregations.extend(_stat_expr(column, stat) for column in columns for stat in stats)

    summary = df.group_by(keys).agg(aggregations)

    if decimals is not None:
        stat_columns = [f"{column}_{stat}" for column in columns for stat in stats]
        summary = summary.with_columns([pl.col(name).cast(pl.Float64).round(decimals) for name in stat_columns])

    if include_percentage:
        summary = summary.with_columns(
            percentage_of_total=(pl.col("track_count") * 100.0 / total).round(2),
        )

    if min_count is not None:
        summary = summary.filter(pl.col("track_count") >= min_count)

    if sort_by is not None:
        summary = summary.sort(sort_by, descending=descending, nulls_last=True)

    if limit is not None:
        summary = summary.head(limit)

    logger.debug(f"Summarised {total} tracks into {summary.height} groups by {keys}")
    return summary


def column_statistics(df: pl.DataFrame, columns: Sequence[str], decimals: int = 4) -> pl.DataFrame:
    """
    Compute minimum, maximum, average and sample standard deviation per column.

    Parameters
    ----------
    df : pl.DataFrame
        Track records.
    columns : Sequence[str]
        Numeric columns to describe.
    decimals : int, optional
        Rounding applied to every statistic, by default 4.

    Returns
    -------
    pl.DataFrame
        One row per column with ``feature_name``, ``minimum``, ``maximum``, ``average`` and
        ``standard_deviation``, ordered by ``feature_name``.

    Raises
    ------
    EmptyDatasetError
        If ``df`` has no rows.
    """
    if df.height == 0:
        raise EmptyDatasetError("Cannot describe columns of an empty frame")

    rows = []
    for column in columns:
        series = df.get_column(column).cast(pl.Float64)
        rows.append({
            "feature_name": column,
            "minimum": series.min(),
            "maximum": series.max(),
            "average": series.mean(),
            "standard_deviation": series.std(ddof=1),
        })

    stats = pl.from_dicts(
        rows,
        schema={
            "feature_name": pl.Utf8,
            "minimum": pl.Float64,
            "maximum": pl.Float64,
            "average": pl.Float64,
            "standard_deviation": pl.Float64,
        },
    )
    return stats.with_columns(pl.exclude("feature_name").round(decimals)).sort("feature_name")
