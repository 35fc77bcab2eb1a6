"""Unit tests for the polars file IO manager."""

from pathlib import Path

import dagster as dg
import polars as pl
import pytest

from src.resources.io_managers import PolarsFileIOManager

REPORT_KEY = dg.AssetKey(["music", "reports", "album_type_distribution"])


@pytest.fixture
def report() -> pl.DataFrame:
    """
    Fixture providing a small report frame.

    Returns
    -------
    pl.DataFrame
        Album type distribution rows.
    """
    return pl.DataFrame({
        "analysis_section": ["ALBUM TYPE DISTRIBUTION"] * 2,
        "album_type": ["album", "single"],
        "track_count": [3, 1],
        "percentage_of_total": [75.0, 25.0],
    })


@pytest.mark.parametrize("file_format", ["parquet", "csv"])
def test_io_manager_round_trip(tmp_path: Path, report: pl.DataFrame, file_format: str) -> None:
    """Test a frame written for an asset key is read back from the key's path."""
    io_manager = PolarsFileIOManager(output_base_path=str(tmp_path), file_format=file_format)

    io_manager.handle_output(dg.build_output_context(asset_key=REPORT_KEY), report)

    expected_path = tmp_path / "music" / "reports" / f"album_type_distribution.{file_format}"
    assert expected_path.exists()

    loaded = io_manager.load_input(dg.build_input_context(asset_key=REPORT_KEY))
    assert loaded.equals(report)


def test_io_manager_collects_lazy_frames(tmp_path: Path, report: pl.DataFrame) -> None:
    """Test LazyFrames are collected before writing."""
    io_manager = PolarsFileIOManager(output_base_path=str(tmp_path))

    io_manager.handle_output(dg.build_output_context(asset_key=REPORT_KEY), report.lazy())

    assert io_manager.load_input(dg.build_input_context(asset_key=REPORT_KEY)).height == 2


def test_io_manager_rejects_other_types(tmp_path: Path) -> None:
    """Test unsupported objects raise a TypeError."""
    io_manager = PolarsFileIOManager(output_base_path=str(tmp_path))

    with pytest.raises(TypeError, match="Unsupported object type"):
        io_manager.handle_output(dg.build_output_context(asset_key=REPORT_KEY), [{"track_count": 1}])


def test_io_manager_missing_input(tmp_path: Path) -> None:
    """Test loading an asset that was never materialised fails."""
    io_manager = PolarsFileIOManager(output_base_path=str(tmp_path))

    with pytest.raises(FileNotFoundError):
        io_manager.load_input(dg.build_input_context(asset_key=REPORT_KEY))
