"""Track performance reports: top tracks, platform dominance and streaming outliers."""

import dagster as dg
import polars as pl

from src.assets.music.common import REPORT_ASSET_KWARGS, SILVER_TRACKS_IN
from src.assets.music.config import OutlierAnalysisConfig, TopNConfig
from src.utils.errors import EmptyDatasetError, ZeroVarianceError
from src.utils.outliers import detect_outliers
from src.utils.reports import empty_report, label_report

BILLION = 1_000_000_000


@dg.asset(
    name="billion_stream_tracks",
    description="Tracks with more than a billion Spotify streams",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def billion_stream_tracks(spotify_tracks_silver: pl.DataFrame) -> pl.DataFrame:
    """List every track above one billion streams, most streamed first."""
    report = (
        spotify_tracks_silver.filter(pl.col("stream") > BILLION)
        .sort("stream", descending=True)
        .select("artist", "track", spotify_streams=pl.col("stream"), youtube_views=pl.col("views"), album=pl.col("album"))
    )
    return label_report(report, "billion_stream_tracks")


@dg.asset(
    name="spotify_dominant_tracks",
    description="Tracks with more Spotify streams than YouTube views",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def spotify_dominant_tracks(spotify_tracks_silver: pl.DataFrame, config: TopNConfig) -> pl.DataFrame:
    """
    Rank the tracks performing better on Spotify than on YouTube.

    Parameters
    ----------
    spotify_tracks_silver : pl.DataFrame
        Quality-gated tracks.
    config : TopNConfig
        Number of tracks to report, 20 by default.

    Returns
    -------
    pl.DataFrame
        Tracks ordered by ``spotify_advantage`` (streams minus views) descending.
    """
    report = (
        spotify_tracks_silver.filter(pl.col("stream") > pl.col("views"))
        .select(
            "artist",
            "track",
            spotify_streams=pl.col("stream"),
            youtube_views=pl.col("views"),
            spotify_advantage=pl.col("stream") - pl.col("views"),
            spotify_dominance_percent=((pl.col("stream") - pl.col("views")) * 100.0 / pl.col("stream")).round(1),
        )
        .sort("spotify_advantage", descending=True)
        .head(config.resolve_limit(20))
    )
    return label_report(report, "spotify_dominant_tracks")


@dg.asset(
    name="above_average_liveness",
    description="Tracks whose liveness exceeds the dataset average",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def above_average_liveness(spotify_tracks_silver: pl.DataFrame, config: TopNConfig) -> pl.DataFrame:
    """Rank the tracks with the most live-performance feel above the dataset average."""
    avg_liveness = spotify_tracks_silver.get_column("liveness").mean()
    if avg_liveness is None:
        return empty_report(
            "above_average_liveness",
            {
                "artist": pl.Utf8,
                "track": pl.Utf8,
                "liveness_score": pl.Float64,
                "dataset_avg_liveness": pl.Float64,
                "liveness_difference": pl.Float64,
                "energy_score": pl.Float64,
            },
        )

    report = (
        spotify_tracks_silver.filter(pl.col("liveness") > avg_liveness)
        .sort("liveness", descending=True)
        .head(config.resolve_limit(15))
        .select(
            "artist",
            "track",
            liveness_score=pl.col("liveness").round(3),
            dataset_avg_liveness=pl.lit(avg_liveness).round(3),
            liveness_difference=(pl.col("liveness") - avg_liveness).round(3),
            energy_score=pl.col("energy").round(3),
        )
    )
    return label_report(report, "above_average_liveness")


@dg.asset(
    name="streaming_outlier_analysis",
    description="Tracks whose streaming z-score marks them as exceptional or below average",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def streaming_outlier_analysis(
    context: dg.AssetExecutionContext, spotify_tracks_silver: pl.DataFrame, config: OutlierAnalysisConfig
) -> pl.DataFrame:
    """
    Report the tracks whose streams deviate most from the dataset mean.

    Every track is scored against the mean and sample standard deviation of the whole dataset.
    Only tracks whose absolute z-score exceeds ``config.surface_threshold`` are reported; their
    ``performance_category`` is decided by ``config.classification_threshold``.

    Parameters
    ----------
    context : dg.AssetExecutionContext
        The execution context.
    spotify_tracks_silver : pl.DataFrame
        Quality-gated tracks.
    config : OutlierAnalysisConfig
        Metric, thresholds and row limit.

    Returns
    -------
    pl.DataFrame
        Surfaced tracks ordered by z-score descending. Empty when the metric has no values or no variance.
    """
    metric = config.metric
    avg_column = f"dataset_avg_{metric}"

    try:
        outliers = detect_outliers(
            spotify_tracks_silver,
            metric,
            classification_threshold=config.classification_threshold,
            surface_threshold=config.surface_threshold,
            limit=config.limit,
        )
    except (ZeroVarianceError, EmptyDatasetError) as e:
        context.log.warning(f"Skipping outlier analysis of '{metric}': {e}")
        return empty_report(
            "streaming_outlier_analysis",
            {
                "artist": pl.Utf8,
                "track": pl.Utf8,
                metric: pl.Float64,
                avg_column: pl.Float64,
                "z_score": pl.Float64,
                "performance_category": pl.Utf8,
            },
        )

    context.log.info(f"Surfaced {outliers.height} tracks with |z| > {config.surface_threshold} on '{metric}'")
    report = outliers.select(
        "artist",
        "track",
        pl.col(metric).cast(pl.Float64),
        pl.col("dataset_avg").round(0).alias(avg_column),
        pl.col("z_score").round(2),
        "performance_category",
    )
    return label_report(report, "streaming_outlier_analysis")


@dg.asset(
    name="single_releases",
    description="Single releases ranked by Spotify streams",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def single_releases(spotify_tracks_silver: pl.DataFrame, config: TopNConfig) -> pl.DataFrame:
    """Rank the single releases by streams."""
    report = (
        spotify_tracks_silver.filter(pl.col("album_type") == "single")
        .sort("stream", descending=True)
        .head(config.resolve_limit(20))
        .select("artist", "track", "album", spotify_streams=pl.col("stream"), youtube_views=pl.col("views"))
    )
    return label_report(report, "single_releases")


@dg.asset(
    name="licensed_content_engagement",
    description="Total and average YouTube comments and likes of licensed tracks",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def licensed_content_engagement(spotify_tracks_silver: pl.DataFrame) -> pl.DataFrame:
    """Sum the YouTube engagement of licensed content."""
    report = spotify_tracks_silver.filter(pl.col("licensed")).select(
        total_comments_licensed=pl.col("comments").sum(),
        licensed_tracks=pl.len(),
        avg_comments_per_licensed_track=pl.col("comments").mean().round(0),
        total_likes_licensed=pl.col("likes").sum(),
        avg_likes_per_licensed_track=pl.col("likes").mean().round(0),
    )
    return label_report(report, "licensed_content_engagement")


@dg.asset(
    name="official_music_videos",
    description="Official music videos ranked by YouTube views",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def official_music_videos(spotify_tracks_silver: pl.DataFrame, config: TopNConfig) -> pl.DataFrame:
    """Rank official music videos by views."""
    report = (
        spotify_tracks_silver.filter(pl.col("official_video"))
        .sort("views", descending=True)
        .head(config.resolve_limit(20))
        .select(
            "artist",
            "track",
            "album",
            youtube_views=pl.col("views"),
            youtube_likes=pl.col("likes"),
            youtube_comments=pl.col("comments"),
            spotify_streams=pl.col("stream"),
            youtube_channel=pl.col("channel"),
        )
    )
    return label_report(report, "official_music_videos")


@dg.asset(
    name="highest_energy_tracks",
    description="Most energetic tracks in the dataset",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def highest_energy_tracks(spotify_tracks_silver: pl.DataFrame, config: TopNConfig) -> pl.DataFrame:
    """Rank tracks by energy."""
    report = (
        spotify_tracks_silver.sort("energy", descending=True)
        .head(config.resolve_limit(15))
        .select(
            "artist",
            "track",
            energy_score=pl.col("energy").round(3),
            danceability_score=pl.col("danceability").round(3),
            loudness_db=pl.col("loudness").round(1),
            spotify_streams=pl.col("stream"),
        )
    )
    return label_report(report, "highest_energy_tracks")
