"""Pearson correlation reports between audio features and popularity."""

import dagster as dg
import polars as pl

from src.assets.music.common import REPORT_ASSET_KWARGS, SILVER_TRACKS_IN
from src.utils.correlation import correlation_report
from src.utils.reports import label_report

FEATURE_POPULARITY_PAIRS = {
    "Danceability vs YouTube Views": ("danceability", "views"),
    "Energy vs YouTube Views": ("energy", "views"),
    "Valence vs YouTube Views": ("valence", "views"),
    "Acousticness vs YouTube Views": ("acousticness", "views"),
    "Danceability vs Spotify Streams": ("danceability", "stream"),
    "Energy vs Spotify Streams": ("energy", "stream"),
    "Valence vs Spotify Streams": ("valence", "stream"),
    "Duration vs YouTube Views": ("duration_min", "views"),
    "Duration vs Spotify Streams": ("duration_min", "stream"),
    "Loudness vs YouTube Views": ("loudness", "views"),
}

INTER_FEATURE_PAIRS = {
    "Energy vs Loudness": ("energy", "loudness"),
    "Danceability vs Valence": ("danceability", "valence"),
    "Energy vs Acousticness": ("energy", "acousticness"),
    "Speechiness vs Instrumentalness": ("speechiness", "instrumentalness"),
    "Liveness vs Energy": ("liveness", "energy"),
    "Acousticness vs Loudness": ("acousticness", "loudness"),
}


@dg.asset(
    name="feature_popularity_correlations",
    description="Pearson correlation of audio features with YouTube views and Spotify streams",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def feature_popularity_correlations(
    context: dg.AssetExecutionContext, spotify_tracks_silver: pl.DataFrame
) -> pl.DataFrame:
    """
    Rank how strongly each audio feature relates to popularity.

    Pairs whose correlation is undefined (a constant column or fewer than two tracks)
    are left out of the report.

    Parameters
    ----------
    context : dg.AssetExecutionContext
        The execution context.
    spotify_tracks_silver : pl.DataFrame
        Quality-gated tracks.

    Returns
    -------
    pl.DataFrame
        ``correlation_type`` and ``correlation_strength``, strongest first regardless of sign.
    """
    report = correlation_report(
        spotify_tracks_silver, FEATURE_POPULARITY_PAIRS, label_column="correlation_type", skip_undefined=True
    )
    if report.height < len(FEATURE_POPULARITY_PAIRS):
        context.log.warning(f"{len(FEATURE_POPULARITY_PAIRS) - report.height} correlations were undefined")
    return label_report(report, "feature_popularity_correlations")


@dg.asset(
    name="inter_feature_correlations",
    description="Pearson correlation between pairs of audio features",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def inter_feature_correlations(context: dg.AssetExecutionContext, spotify_tracks_silver: pl.DataFrame) -> pl.DataFrame:
    """Rank how strongly audio features relate to each other."""
    report = correlation_report(
        spotify_tracks_silver, INTER_FEATURE_PAIRS, label_column="feature_relationship", skip_undefined=True
    )
    if report.height < len(INTER_FEATURE_PAIRS):
        context.log.warning(f"{len(INTER_FEATURE_PAIRS) - report.height} correlations were undefined")
    return label_report(report, "inter_feature_correlations")
