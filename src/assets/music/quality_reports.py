"""Data quality reports over the raw track snapshot."""

import dagster as dg
import polars as pl

from src.assets.music.common import BRONZE_TRACKS_IN, REPORT_ASSET_KWARGS
from src.utils.reports import label_report
from src.utils.track_data import completeness_counts, count_quality_issues, find_duplicate_tracks


@dg.asset(
    name="data_completeness_report",
    description="Total rows and non-null counts for every track column",
    ins=BRONZE_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def data_completeness_report(spotify_tracks_bronze: pl.DataFrame) -> pl.DataFrame:
    """Count non-null values per column of the raw snapshot."""
    return label_report(completeness_counts(spotify_tracks_bronze), "data_completeness_report")


@dg.asset(
    name="duplicate_tracks_report",
    description="Artist/track/album combinations appearing more than once",
    ins=BRONZE_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def duplicate_tracks_report(context: dg.AssetExecutionContext, spotify_tracks_bronze: pl.DataFrame) -> pl.DataFrame:
    """List the duplicated artist/track/album combinations."""
    duplicates = find_duplicate_tracks(spotify_tracks_bronze)
    if duplicates.height:
        context.log.warning(f"Found {duplicates.height} duplicated artist/track/album combinations")
    return label_report(duplicates, "duplicate_tracks_report")


@dg.asset(
    name="data_quality_issues_report",
    description="Number of raw records affected by each quality issue",
    ins=BRONZE_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def data_quality_issues_report(spotify_tracks_bronze: pl.DataFrame) -> pl.DataFrame:
    """
    Count the raw records failing each quality rule.

    The same rules decide which records the silver layer drops.

    Parameters
    ----------
    spotify_tracks_bronze : pl.DataFrame
        Normalised snapshot.

    Returns
    -------
    pl.DataFrame
        ``issue_type`` and ``problematic_records``, most frequent first.
    """
    return label_report(count_quality_issues(spotify_tracks_bronze), "data_quality_issues_report")
