"""Utility functions for normalising and quality-checking the Spotify/YouTube track snapshot."""

import re

import polars as pl
from loguru import logger

from src.utils.errors import MalformedRecordError

BOUNDED_FEATURES = (
    "danceability",
    "energy",
    "speechiness",
    "acousticness",
    "instrumentalness",
    "liveness",
    "valence",
)
ENGAGEMENT_COLUMNS = ("views", "likes", "comments", "stream")
ALBUM_TYPES = ("single", "album", "compilation")

TRACK_SCHEMA: dict[str, pl.DataType] = {
    "artist": pl.Utf8,
    "track": pl.Utf8,
    "album": pl.Utf8,
    "album_type": pl.Utf8,
    "danceability": pl.Float64,
    "energy": pl.Float64,
    "loudness": pl.Float64,
    "speechiness": pl.Float64,
    "acousticness": pl.Float64,
    "instrumentalness": pl.Float64,
    "liveness": pl.Float64,
    "valence": pl.Float64,
    "tempo": pl.Float64,
    "duration_min": pl.Float64,
    "title": pl.Utf8,
    "channel": pl.Utf8,
    "views": pl.Int64,
    "likes": pl.Int64,
    "comments": pl.Int64,
    "licensed": pl.Boolean,
    "official_video": pl.Boolean,
    "stream": pl.Int64,
    "energy_liveness": pl.Float64,
    "most_played_on": pl.Utf8,
}
OPTIONAL_COLUMNS = ("title", "channel", "energy_liveness")
REQUIRED_COLUMNS = tuple(column for column in TRACK_SCHEMA if column not in OPTIONAL_COLUMNS)

# Raw headers that snake_case alone does not map onto the track schema
COLUMN_ALIASES = {
    "energyliveness": "energy_liveness",
    "most_playedon": "most_played_on",
    "streams": "stream",
}

_BOOLEAN_VALUES = {"true": True, "false": False, "1": True, "0": False, "yes": True, "no": False}


def to_snake_case(text: str) -> str:
    """
    Convert a raw dataset header to snake_case.

    Parameters
    ----------
    text : str
        Input header.

    Returns
    -------
    str
        Header converted to snake_case.

    Examples
    --------
    >>> to_snake_case("Duration_min")
    'duration_min'
    >>> to_snake_case("Album Type")
    'album_type'
    >>> to_snake_case("most_playedon")
    'most_playedon'
    """
    text = re.sub(r"[\s\-\.]+", "_", text.strip())
    text = re.sub(r"_+", "_", text.lower())
    return text.strip("_")


def _boolean_expr(column: str) -> pl.Expr:
    return (
        pl.col(column)
        .cast(pl.Utf8)
        .str.strip_chars()
        .str.to_lowercase()
        .replace_strict(_BOOLEAN_VALUES, default=None, return_dtype=pl.Boolean)
    )


def normalize_track_columns(raw: pl.DataFrame) -> pl.DataFrame:
    """
    Rename raw headers to the track schema and cast every column to its declared type.

    Extra columns are dropped. Values that cannot be cast become null and are later
    rejected by the quality gate.

    Parameters
    ----------
    raw : pl.DataFrame
        The snapshot as read from disk.

    Returns
    -------
    pl.DataFrame
        Frame holding exactly the ``TRACK_SCHEMA`` columns, in order.

    Raises
    ------
    ValueError
        If a required column is missing from the snapshot.
    """
    mapping = {}
    for column in raw.columns:
        name = to_snake_case(column)
        mapping[column] = COLUMN_ALIASES.get(name, name)
    normalized = raw.rename(mapping)

    missing = [column for column in REQUIRED_COLUMNS if column not in normalized.columns]
    if missing:
        raise ValueError(f"Snapshot is missing required columns: {missing}")

    expressions = []
    for column, dtype in TRACK_SCHEMA.items():
        if column not in normalized.columns:
            expressions.append(pl.lit(None, dtype=dtype).alias(column))
        elif dtype == pl.Boolean:
            expressions.append(_boolean_expr(column).alias(column))
        elif dtype == pl.Int64:
            # Counts are often exported as floats (e.g. "693555221.0")
            expressions.append(pl.col(column).cast(pl.Float64, strict=False).cast(pl.Int64, strict=False))
        elif dtype == pl.Utf8:
            expressions.append(pl.col(column).cast(pl.Utf8).str.strip_chars())
        else:
            expressions.append(pl.col(column).cast(dtype, strict=False))

    dropped = [column for column in normalized.columns if column not in TRACK_SCHEMA]
    if dropped:
        logger.info(f"Dropping columns outside the track schema: {dropped}")

    return normalized.select(expressions)


def quality_issue_exprs() -> dict[str, pl.Expr]:
    """
    Return one boolean expression per quality issue, true where a record has the issue.

    Returns
    -------
    dict[str, pl.Expr]
        Issue label to flag expression.
    """
    issues = {
        "Missing Required Values": pl.any_horizontal([pl.col(column).is_null() for column in REQUIRED_COLUMNS]),
        "Invalid Duration (<=0 minutes)": pl.col("duration_min") <= 0,
        "Invalid Tempo (<=0 BPM)": pl.col("tempo") <= 0,
        "Invalid Album Type": ~pl.col("album_type").is_in(list(ALBUM_TYPES)),
        "Negative Energy Liveness": pl.col("energy_liveness") < 0,
    }
    for column in ENGAGEMENT_COLUMNS:
        label = "Streams" if column == "stream" else column.capitalize()
        issues[f"Negative {label}"] = pl.col(column) < 0
    for feature in BOUNDED_FEATURES:
        issues[f"Invalid {feature.capitalize()} (not 0-1)"] = (pl.col(feature) < 0) | (pl.col(feature) > 1)

    # Comparisons against null yield null; a null is only an issue through "Missing Required Values"
    return {label: expr.fill_null(False) for label, expr in issues.items()}


def count_quality_issues(tracks: pl.DataFrame) -> pl.DataFrame:
    """
    Count the records affected by each quality issue.

    Parameters
    ----------
    tracks : pl.DataFrame
        Normalised track records.

    Returns
    -------
    pl.DataFrame
        ``issue_type`` and ``problematic_records``, most frequent first.
    """
    counts = tracks.select([expr.sum().alias(label) for label, expr in quality_issue_exprs().items()])
    return (
        counts.unpivot(variable_name="issue_type", value_name="problematic_records")
        .with_columns(pl.col("problematic_records").cast(pl.Int64))
        .sort(["problematic_records", "issue_type"], descending=[True, False])
    )


def apply_quality_gate(tracks: pl.DataFrame, strict: bool = False) -> pl.DataFrame:
    """
    Drop the records failing any quality rule.

    Parameters
    ----------
    tracks : pl.DataFrame
        Normalised track records.
    strict : bool, optional
        Raise instead of dropping when an invalid record is found.

    Returns
    -------
    pl.DataFrame
        The valid records.

    Raises
    ------
    MalformedRecordError
        If ``strict`` is set and at least one record is invalid.
    """
    has_issue = pl.any_horizontal(list(quality_issue_exprs().values()))
    invalid_count = tracks.select(has_issue.sum()).item()

    if invalid_count and strict:
        raise MalformedRecordError(f"{invalid_count} track records fail the quality rules")

    if invalid_count:
        logger.warning(f"Dropping {invalid_count} of {tracks.height} track records failing the quality gate")

    return tracks.filter(~has_issue)


def completeness_counts(tracks: pl.DataFrame) -> pl.DataFrame:
    """Count the total rows and the non-null values of every column, as a single row."""
    return tracks.select(
        pl.len().alias("total_rows"),
        *[pl.col(column).count().alias(f"{column}_count") for column in tracks.columns],
    )


def find_duplicate_tracks(tracks: pl.DataFrame, keys: tuple[str, ...] = ("artist", "track", "album")) -> pl.DataFrame:
    """Return the key combinations appearing more than once, with their ``duplicate_count``."""
    return (
        tracks.group_by(list(keys))
        .agg(pl.len().alias("duplicate_count"))
        .filter(pl.col("duplicate_count") > 1)
        .sort("duplicate_count", descending=True)
    )
