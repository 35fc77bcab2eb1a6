"""Dagster jobs for the music insight assets."""

import dagster as dg

music_insights_job = dg.define_asset_job(
    name="music_insights_job",
    selection=dg.AssetSelection.groups("music"),
    description="Load the track snapshot, gate its quality and materialise every music report",
)
