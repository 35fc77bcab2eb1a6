"""Shared asset definitions for the music report assets."""

import dagster as dg

BRONZE_TRACKS_IN = {"spotify_tracks_bronze": dg.AssetIn(key_prefix=["music", "bronze"])}
SILVER_TRACKS_IN = {"spotify_tracks_silver": dg.AssetIn(key_prefix=["music", "silver"])}

REPORT_ASSET_KWARGS = {
    "key_prefix": ["music", "reports"],
    "io_manager_key": "io_manager_pl",
    "group_name": "music",
    "kinds": {"polars", "gold"},
    "tags": {"domain": "music", "layer": "gold"},
}
