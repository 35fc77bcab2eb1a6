"""Labels identifying each report frame produced by the music assets."""

import polars as pl

REPORT_LABEL_COLUMN = "analysis_section"

REPORT_LABELS = {
    "data_completeness_report": "DATA COMPLETENESS CHECK",
    "duplicate_tracks_report": "DUPLICATE ANALYSIS",
    "data_quality_issues_report": "DATA QUALITY ISSUES",
    "dataset_overview": "DATASET OVERVIEW",
    "album_type_distribution": "ALBUM TYPE DISTRIBUTION",
    "platform_popularity": "PLATFORM POPULARITY",
    "audio_feature_statistics": "AUDIO FEATURES STATISTICS",
    "licensed_content_analysis": "LICENSED CONTENT ANALYSIS",
    "official_video_analysis": "OFFICIAL VIDEO ANALYSIS",
    "feature_popularity_correlations": "AUDIO FEATURES vs POPULARITY",
    "inter_feature_correlations": "AUDIO FEATURES RELATIONSHIPS",
    "music_style_classification": "MUSIC STYLE CLASSIFICATION",
    "billion_stream_tracks": "BILLION+ STREAM TRACKS",
    "spotify_dominant_tracks": "SPOTIFY > YOUTUBE PERFORMANCE",
    "above_average_liveness": "ABOVE AVERAGE LIVENESS",
    "artist_album_catalog": "ARTIST-ALBUM CATALOG",
    "album_danceability": "ALBUM DANCEABILITY ANALYSIS",
    "album_energy_range": "ALBUM ENERGY RANGE ANALYSIS",
    "album_youtube_performance": "ALBUM YOUTUBE PERFORMANCE",
    "artist_track_count": "ARTIST TRACK COUNT",
    "artist_performance_summary": "ARTIST PERFORMANCE SUMMARY",
    "streaming_outlier_analysis": "STREAMING OUTLIER ANALYSIS",
    "single_releases": "SINGLE RELEASES",
    "licensed_content_engagement": "LICENSED CONTENT ENGAGEMENT",
    "official_music_videos": "OFFICIAL MUSIC VIDEOS",
    "highest_energy_tracks": "HIGHEST ENERGY TRACKS",
}


def label_report(report: pl.DataFrame, report_name: str) -> pl.DataFrame:
    """
    Prepend the ``analysis_section`` label column to a report frame.

    Parameters
    ----------
    report : pl.DataFrame
        The report rows.
    report_name : str
        Key into ``REPORT_LABELS``.

    Returns
    -------
    pl.DataFrame
        ``report`` with the label as its first column.

    Raises
    ------
    KeyError
        If ``report_name`` has no registered label.
    """
    label = REPORT_LABELS[report_name]
    return report.select(pl.lit(label, dtype=pl.Utf8).alias(REPORT_LABEL_COLUMN), pl.all())


def empty_report(report_name: str, schema: dict[str, pl.DataType]) -> pl.DataFrame:
    """Return a labelled report frame with no rows."""
    return label_report(pl.DataFrame(schema=schema), report_name)
