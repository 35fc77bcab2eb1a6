"""Dataset exploration, content type and music style reports."""

import dagster as dg
import polars as pl

from src.assets.music.common import REPORT_ASSET_KWARGS, SILVER_TRACKS_IN
from src.utils.aggregation import column_statistics, summarize_groups
from src.utils.reports import label_report

AUDIO_FEATURE_COLUMNS = (
    "danceability",
    "energy",
    "loudness",
    "speechiness",
    "acousticness",
    "instrumentalness",
    "liveness",
    "valence",
    "tempo",
    "duration_min",
)

ENGAGEMENT_AVERAGES = {
    "views_mean": "avg_youtube_views",
    "likes_mean": "avg_youtube_likes",
    "comments_mean": "avg_youtube_comments",
    "stream_mean": "avg_spotify_streams",
}


def _engagement_by_flag(tracks: pl.DataFrame, flag: str, label_column: str, when_true: str, when_false: str) -> pl.DataFrame:
    """Average YouTube engagement and Spotify streams for tracks with and without a boolean flag."""
    labelled = tracks.with_columns(
        pl.when(pl.col(flag)).then(pl.lit(when_true)).otherwise(pl.lit(when_false)).alias(label_column)
    )
    summary = summarize_groups(
        labelled,
        by=label_column,
        columns=("views", "likes", "comments", "stream"),
        stats=("mean",),
        sort_by="track_count",
        decimals=0,
    )
    return summary.rename(ENGAGEMENT_AVERAGES)


@dg.asset(
    name="dataset_overview",
    description="Totals, distinct counts and duration/stream ranges of the dataset",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def dataset_overview(spotify_tracks_silver: pl.DataFrame) -> pl.DataFrame:
    """Summarise the whole dataset in a single row."""
    overview = spotify_tracks_silver.select(
        total_tracks=pl.len(),
        unique_artists=pl.col("artist").n_unique(),
        unique_albums=pl.col("album").n_unique(),
        unique_tracks=pl.col("track").n_unique(),
        unique_channels=pl.col("channel").drop_nulls().n_unique(),
        shortest_track_minutes=pl.col("duration_min").min().round(2),
        longest_track_minutes=pl.col("duration_min").max().round(2),
        avg_track_duration_minutes=pl.col("duration_min").mean().round(2),
        min_streams=pl.col("stream").min(),
        max_streams=pl.col("stream").max(),
        avg_streams=pl.col("stream").mean().round(0),
    )
    return label_report(overview, "dataset_overview")


@dg.asset(
    name="album_type_distribution",
    description="Track count and share of the dataset per album type",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def album_type_distribution(spotify_tracks_silver: pl.DataFrame) -> pl.DataFrame:
    """Count tracks per album type."""
    distribution = summarize_groups(
        spotify_tracks_silver, by="album_type", include_percentage=True, stats=(), sort_by="track_count"
    )
    return label_report(distribution, "album_type_distribution")


@dg.asset(
    name="platform_popularity",
    description="Track count, share and average engagement per most-played platform",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def platform_popularity(spotify_tracks_silver: pl.DataFrame) -> pl.DataFrame:
    """Compare the platforms tracks are most played on."""
    popularity = summarize_groups(
        spotify_tracks_silver,
        by="most_played_on",
        columns=("views", "stream"),
        stats=("mean",),
        include_percentage=True,
        sort_by="track_count",
        decimals=0,
    )
    popularity = popularity.rename({
        "most_played_on": "platform",
        "percentage_of_total": "percentage",
        "views_mean": "avg_youtube_views",
        "stream_mean": "avg_spotify_streams",
    })
    return label_report(
        popularity.select("platform", "track_count", "percentage", "avg_youtube_views", "avg_spotify_streams"),
        "platform_popularity",
    )


@dg.asset(
    name="audio_feature_statistics",
    description="Minimum, maximum, average and sample standard deviation of every audio feature",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def audio_feature_statistics(spotify_tracks_silver: pl.DataFrame) -> pl.DataFrame:
    """Describe the audio feature columns."""
    return label_report(column_statistics(spotify_tracks_silver, AUDIO_FEATURE_COLUMNS), "audio_feature_statistics")


@dg.asset(
    name="licensed_content_analysis",
    description="Engagement of licensed versus non-licensed content",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def licensed_content_analysis(spotify_tracks_silver: pl.DataFrame) -> pl.DataFrame:
    """Compare licensed and non-licensed tracks."""
    report = _engagement_by_flag(
        spotify_tracks_silver, "licensed", "content_type", "Licensed Content", "Non-Licensed Content"
    )
    return label_report(report, "licensed_content_analysis")


@dg.asset(
    name="official_video_analysis",
    description="Engagement of official versus non-official videos",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def official_video_analysis(spotify_tracks_silver: pl.DataFrame) -> pl.DataFrame:
    """Compare tracks with and without an official video."""
    report = _engagement_by_flag(
        spotify_tracks_silver, "official_video", "video_type", "Official Videos", "Non-Official Videos"
    )
    return label_report(report, "official_video_analysis")


@dg.asset(
    name="music_style_classification",
    description="Track count, engagement and feature averages per rule-based music style",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def music_style_classification(spotify_tracks_silver: pl.DataFrame) -> pl.DataFrame:
    """
    Summarise the tracks of each music style.

    Parameters
    ----------
    spotify_tracks_silver : pl.DataFrame
        Classified tracks.

    Returns
    -------
    pl.DataFrame
        One row per style present in the data, most common style first.
    """
    summary = summarize_groups(
        spotify_tracks_silver,
        by="music_style",
        columns=("views", "stream", "danceability", "energy", "valence"),
        stats=("mean",),
        sort_by="track_count",
    )
    summary = summary.select(
        "music_style",
        "track_count",
        avg_youtube_views=pl.col("views_mean").round(0),
        avg_spotify_streams=pl.col("stream_mean").round(0),
        avg_danceability=pl.col("danceability_mean").round(3),
        avg_energy=pl.col("energy_mean").round(3),
        avg_valence=pl.col("valence_mean").round(3),
    )
    return label_report(summary, "music_style_classification")
