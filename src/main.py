"""Main entrypoint for Dagster deployment."""

import os

import dagster as dg

import src.assets.music as music_assets
import src.validation.asset_checks as asset_checks_module
from src.jobs.music_insights_jobs import music_insights_job
from src.resources.data_loader import DataLoaderResource
from src.resources.io_managers import PolarsFileIOManager

defs = dg.Definitions(
    assets=dg.with_source_code_references(dg.load_assets_from_package_module(music_assets)),
    resources={
        "io_manager_pl": PolarsFileIOManager(
            output_base_path=os.getenv("OUTPUT_BASE_PATH", "data/output"),
            file_format=os.getenv("REPORT_FILE_FORMAT", "parquet"),
        ),
        "data_loader": DataLoaderResource(config_path=os.getenv("FILE_PATH_CONFIG_PATH", "config/file_paths.yaml")),
    },
    jobs=[music_insights_job],
    asset_checks=dg.load_asset_checks_from_package_module(asset_checks_module),
)
