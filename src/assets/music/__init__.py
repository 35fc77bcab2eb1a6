"""Spotify/YouTube track snapshot and report assets."""

from .catalog_reports import (
    album_danceability,
    album_energy_range,
    album_youtube_performance,
    artist_album_catalog,
    artist_performance_summary,
    artist_track_count,
)
from .correlation_reports import feature_popularity_correlations, inter_feature_correlations
from .exploration_reports import (
    album_type_distribution,
    audio_feature_statistics,
    dataset_overview,
    licensed_content_analysis,
    music_style_classification,
    official_video_analysis,
    platform_popularity,
)
from .performance_reports import (
    above_average_liveness,
    billion_stream_tracks,
    highest_energy_tracks,
    licensed_content_engagement,
    official_music_videos,
    single_releases,
    spotify_dominant_tracks,
    streaming_outlier_analysis,
)
from .quality_reports import data_completeness_report, data_quality_issues_report, duplicate_tracks_report
from .tracks import spotify_tracks_bronze, spotify_tracks_silver

__all__ = [
    "above_average_liveness",
    "album_danceability",
    "album_energy_range",
    "album_type_distribution",
    "album_youtube_performance",
    "artist_album_catalog",
    "artist_performance_summary",
    "artist_track_count",
    "audio_feature_statistics",
    "billion_stream_tracks",
    "data_completeness_report",
    "data_quality_issues_report",
    "dataset_overview",
    "duplicate_tracks_report",
    "feature_popularity_correlations",
    "highest_energy_tracks",
    "inter_feature_correlations",
    "licensed_content_analysis",
    "licensed_content_engagement",
    "music_style_classification",
    "official_music_videos",
    "official_video_analysis",
    "platform_popularity",
    "single_releases",
    "spotify_dominant_tracks",
    "spotify_tracks_bronze",
    "spotify_tracks_silver",
    "streaming_outlier_analysis",
]
