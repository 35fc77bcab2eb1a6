"""Album and artist level reports."""

import dagster as dg
import polars as pl

from src.assets.music.common import REPORT_ASSET_KWARGS, SILVER_TRACKS_IN
from src.assets.music.config import TopNConfig
from src.utils.aggregation import summarize_groups
from src.utils.reports import label_report


@dg.asset(
    name="artist_album_catalog",
    description="Albums ranked by average streams per track",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def artist_album_catalog(spotify_tracks_silver: pl.DataFrame, config: TopNConfig) -> pl.DataFrame:
    """Summarise each artist/album/album type combination."""
    catalog = summarize_groups(
        spotify_tracks_silver,
        by=["artist", "album", "album_type"],
        columns=("stream", "views"),
        stats=("mean",),
        sort_by="stream_mean",
        limit=config.resolve_limit(20),
        decimals=0,
    )
    catalog = catalog.select(
        "artist",
        "album",
        "album_type",
        tracks_in_album=pl.col("track_count"),
        avg_album_streams=pl.col("stream_mean"),
        avg_album_views=pl.col("views_mean"),
    )
    return label_report(catalog, "artist_album_catalog")


@dg.asset(
    name="album_danceability",
    description="Multi-track albums ranked by average danceability",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def album_danceability(spotify_tracks_silver: pl.DataFrame, config: TopNConfig) -> pl.DataFrame:
    """Rank albums holding more than one track by their average danceability."""
    albums = summarize_groups(
        spotify_tracks_silver,
        by=["artist", "album"],
        columns=("danceability", "energy", "valence"),
        stats=("mean",),
        min_count=2,
        sort_by="danceability_mean",
        limit=config.resolve_limit(15),
        decimals=3,
    )
    albums = albums.select(
        "artist",
        "album",
        tracks_in_album=pl.col("track_count"),
        avg_danceability=pl.col("danceability_mean"),
        avg_energy=pl.col("energy_mean"),
        avg_valence=pl.col("valence_mean"),
    )
    return label_report(albums, "album_danceability")


@dg.asset(
    name="album_energy_range",
    description="Multi-track albums ranked by the spread of their energy",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def album_energy_range(spotify_tracks_silver: pl.DataFrame, config: TopNConfig) -> pl.DataFrame:
    """
    Rank albums by the difference between their most and least energetic tracks.

    Parameters
    ----------
    spotify_tracks_silver : pl.DataFrame
        Quality-gated tracks.
    config : TopNConfig
        Number of albums to report, 15 by default.

    Returns
    -------
    pl.DataFrame
        Energy max, min, range, average and sample standard deviation per album.
    """
    albums = summarize_groups(
        spotify_tracks_silver,
        by=["artist", "album"],
        columns=("energy",),
        stats=("max", "min", "mean", "std"),
        min_count=2,
    )
    albums = (
        albums.select(
            "artist",
            "album",
            pl.col("track_count"),
            max_energy=pl.col("energy_max").round(3),
            min_energy=pl.col("energy_min").round(3),
            energy_range=(pl.col("energy_max") - pl.col("energy_min")).round(3),
            avg_energy=pl.col("energy_mean").round(3),
            energy_std_dev=pl.col("energy_std").round(3),
        )
        .sort("energy_range", descending=True)
        .head(config.resolve_limit(15))
    )
    return label_report(albums, "album_energy_range")


@dg.asset(
    name="album_youtube_performance",
    description="Albums ranked by total YouTube views",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def album_youtube_performance(spotify_tracks_silver: pl.DataFrame, config: TopNConfig) -> pl.DataFrame:
    """Total the YouTube and Spotify engagement of each album."""
    albums = summarize_groups(
        spotify_tracks_silver,
        by=["artist", "album"],
        columns=("views", "likes", "stream"),
        stats=("sum", "mean"),
        sort_by="views_sum",
        limit=config.resolve_limit(15),
    )
    albums = albums.select(
        "artist",
        "album",
        tracks_in_album=pl.col("track_count"),
        total_album_views=pl.col("views_sum"),
        avg_views_per_track=pl.col("views_mean").round(0),
        total_album_likes=pl.col("likes_sum"),
        total_album_streams=pl.col("stream_sum"),
    )
    return label_report(albums, "album_youtube_performance")


@dg.asset(
    name="artist_track_count",
    description="Artists ranked by total Spotify streams",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def artist_track_count(spotify_tracks_silver: pl.DataFrame, config: TopNConfig) -> pl.DataFrame:
    """Count tracks and total streams per artist."""
    artists = summarize_groups(
        spotify_tracks_silver,
        by="artist",
        columns=("stream", "views"),
        stats=("mean", "sum"),
        sort_by="stream_sum",
        limit=config.resolve_limit(20),
    )
    artists = artists.select(
        "artist",
        total_tracks=pl.col("track_count"),
        avg_streams_per_track=pl.col("stream_mean").round(0),
        avg_views_per_track=pl.col("views_mean").round(0),
        total_artist_streams=pl.col("stream_sum"),
    )
    return label_report(artists, "artist_track_count")


@dg.asset(
    name="artist_performance_summary",
    description="Streaming, YouTube and audio profile of artists with at least two tracks",
    ins=SILVER_TRACKS_IN,
    **REPORT_ASSET_KWARGS,
)
def artist_performance_summary(spotify_tracks_silver: pl.DataFrame, config: TopNConfig) -> pl.DataFrame:
    """Profile the artists with at least two tracks, most streamed first."""
    artists = summarize_groups(
        spotify_tracks_silver,
        by="artist",
        columns=("stream", "views", "danceability", "energy", "valence", "official_video", "licensed"),
        stats=("mean", "sum"),
        min_count=2,
        sort_by="stream_sum",
        limit=config.resolve_limit(20),
    )
    artists = artists.select(
        "artist",
        total_tracks=pl.col("track_count"),
        avg_streams_per_track=pl.col("stream_mean").round(0),
        total_artist_streams=pl.col("stream_sum"),
        avg_youtube_views=pl.col("views_mean").round(0),
        avg_danceability=pl.col("danceability_mean").round(3),
        avg_energy=pl.col("energy_mean").round(3),
        avg_valence=pl.col("valence_mean").round(3),
        official_videos=pl.col("official_video_sum").cast(pl.Int64),
        licensed_tracks=pl.col("licensed_sum").cast(pl.Int64),
    )
    return label_report(artists, "artist_performance_summary")
