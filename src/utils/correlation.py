"""Pearson correlation between numeric track columns."""

import math
from collections.abc import Mapping, Sequence

import polars as pl
from loguru import logger

from src.utils.errors import EmptyDatasetError, ZeroVarianceError


def _as_float_series(values: Sequence[float] | pl.Series) -> pl.Series:
    if isinstance(values, pl.Series):
        return values.cast(pl.Float64)
    return pl.Series(values=list(values), dtype=pl.Float64)


def pearson_correlation(x: Sequence[float] | pl.Series, y: Sequence[float] | pl.Series) -> float:
    """
    Compute the Pearson correlation coefficient of two paired series.

    Pairs with a null on either side are ignored.

    Parameters
    ----------
    x : Sequence[float] | pl.Series
        First series.
    y : Sequence[float] | pl.Series
        Second series, paired with ``x`` by position.

    Returns
    -------
    float
        The coefficient, within [-1, 1].

    Raises
    ------
    ValueError
        If the series have different lengths.
    EmptyDatasetError
        If fewer than two complete pairs remain.
    ZeroVarianceError
        If either series is constant.

    Examples
    --------
    >>> pearson_correlation([1, 2, 3], [2, 4, 6])
    1.0
    """
    if len(x) != len(y):
        raise ValueError(f"Series lengths differ: {len(x)} != {len(y)}")

    pairs = pl.DataFrame({"x": _as_float_series(x), "y": _as_float_series(y)}).drop_nulls()

    if pairs.height < 2:
        raise EmptyDatasetError(f"Need at least two complete pairs, got {pairs.height}")

    if pairs["x"].min() == pairs["x"].max() or pairs["y"].min() == pairs["y"].max():
        raise ZeroVarianceError("Correlation is undefined for a series with zero variance")

    dx = pl.col("x") - pl.col("x").mean()
    dy = pl.col("y") - pl.col("y").mean()
    sums = pairs.select(
        sxy=(dx * dy).sum(),
        sxx=(dx * dx).sum(),
        syy=(dy * dy).sum(),
    ).row(0, named=True)

    denominator = math.sqrt(sums["sxx"] * sums["syy"])
    if denominator == 0:
        raise ZeroVarianceError("Correlation is undefined for a series with zero variance")

    return max(-1.0, min(1.0, sums["sxy"] / denominator))


def correlation_report(
    df: pl.DataFrame,
    pairs: Mapping[str, tuple[str, str]],
    label_column: str = "correlation_type",
    decimals: int = 4,
    skip_undefined: bool = False,
) -> pl.DataFrame:
    """
    Correlate named column pairs and rank them by strength.

    Parameters
    ----------
    df : pl.DataFrame
        Track records.
    pairs : Mapping[str, tuple[str, str]]
        Report label to ``(x_column, y_column)``.
    label_column : str, optional
        Name of the output column holding the pair label.
    decimals : int, optional
        Rounding applied to the coefficients, by default 4.
    skip_undefined : bool, optional
        Omit pairs whose correlation is undefined (zero variance or fewer than two
        complete pairs) instead of raising.

    Returns
    -------
    pl.DataFrame
        ``label_column`` and ``correlation_strength``, ordered by absolute coefficient descending.
    """
    rows = []
    for label, (x_column, y_column) in pairs.items():
        try:
            coefficient = pearson_correlation(df.get_column(x_column), df.get_column(y_column))
        except (ZeroVarianceError, EmptyDatasetError) as e:
            if not skip_undefined:
                raise
            logger.warning(f"Skipping '{label}' ({x_column}, {y_column}): {e}")
            continue
        rows.append({label_column: label, "correlation_strength": round(coefficient, decimals)})

    report = pl.from_dicts(rows, schema={label_column: pl.Utf8, "correlation_strength": pl.Float64})
    return report.sort(pl.col("correlation_strength").abs(), descending=True)
