"""Unit tests for snapshot path resolution and loading."""

from pathlib import Path
from unittest.mock import patch

import dagster as dg
import polars as pl
import pytest
import yaml

from src.resources.data_loader import DataLoaderResource
from src.utils.data_loaders import (
    FileFormat,
    PolarsDataLoader,
    filter_kwargs,
    resolve_storage_path,
)

PATH_CONFIG = {
    "paths": {
        "spotify": {
            "tracks": {
                "local": "data/raw/spotify_youtube.csv",
                "prod": "s3://music-insights/raw/spotify_youtube.csv",
            }
        }
    }
}


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    """
    Fixture writing a csv and a parquet snapshot plus a path configuration.

    Returns
    -------
    Path
        Directory holding ``tracks.csv``, ``tracks.parquet`` and ``file_paths.yaml``.
    """
    df = pl.DataFrame({"Artist": ["Gorillaz", "Daft Punk"], "Stream": [1040234854.0, 980000000.0]})
    df.write_csv(tmp_path / "tracks.csv")
    df.write_parquet(tmp_path / "tracks.parquet")

    config = {
        "paths": {
            "spotify": {
                "tracks": {"local": str(tmp_path / "tracks.csv"), "test": str(tmp_path / "tracks.parquet")},
            }
        }
    }
    (tmp_path / "file_paths.yaml").write_text(yaml.safe_dump(config), encoding="utf-8")
    return tmp_path


def test_filter_kwargs() -> None:
    """Test keyword arguments not accepted by the reader are dropped."""

    def reader(source: str, separator: str = ",") -> str:
        return source + separator

    assert filter_kwargs(reader, {"separator": ";", "lazy": True}) == {"separator": ";"}


def test_resolve_storage_path() -> None:
    """Test the two-layer lookup and its failure modes."""
    assert resolve_storage_path(PATH_CONFIG, "spotify", "tracks", "prod").startswith("s3://")

    with pytest.raises(KeyError, match="Malformed"):
        resolve_storage_path({}, "spotify", "tracks", "local")
    with pytest.raises(KeyError, match="dataset youtube"):
        resolve_storage_path(PATH_CONFIG, "youtube", "tracks", "local")
    with pytest.raises(KeyError, match="table albums"):
        resolve_storage_path(PATH_CONFIG, "spotify", "albums", "local")
    with pytest.raises(KeyError, match="environment staging"):
        resolve_storage_path(PATH_CONFIG, "spotify", "tracks", "staging")


def test_polars_data_loader_formats(snapshot_dir: Path) -> None:
    """Test csv and parquet snapshots are scanned lazily."""
    loader = PolarsDataLoader()

    assert loader._infer_data_format("TRACKS.CSV") == FileFormat.CSV  # noqa: SLF001
    assert loader._infer_data_format("tracks.json") == FileFormat.UNKNOWN  # noqa: SLF001

    csv_frame = loader.load(str(snapshot_dir / "tracks.csv"), infer_schema_length=100, unknown_option=True)
    parquet_frame = loader.load(str(snapshot_dir / "tracks.parquet"))

    assert isinstance(csv_frame, pl.LazyFrame)
    assert csv_frame.collect().equals(parquet_frame.collect())


def test_polars_data_loader_errors(snapshot_dir: Path) -> None:
    """Test missing files and unsupported formats are rejected."""
    loader = PolarsDataLoader()

    with pytest.raises(FileNotFoundError):
        loader.load(str(snapshot_dir / "missing.csv"))

    (snapshot_dir / "tracks.json").write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported format"):
        loader.load(str(snapshot_dir / "tracks.json"))


def test_data_loader_resource(snapshot_dir: Path) -> None:
    """Test the resource resolves the configured path and materialises the snapshot."""
    resource = DataLoaderResource(config_path=str(snapshot_dir / "file_paths.yaml"), environment="local")
    resource.setup_for_execution(dg.build_init_resource_context())

    assert resource.get_storage_path("spotify", "tracks") == str(snapshot_dir / "tracks.csv")

    tracks = resource.load_data("spotify", "tracks")
    assert isinstance(tracks, pl.DataFrame)
    assert tracks["Artist"].to_list() == ["Gorillaz", "Daft Punk"]

    assert isinstance(resource.load_data("spotify", "tracks", lazy=True), pl.LazyFrame)


def test_data_loader_resource_reads_environment(snapshot_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the ``ENVIRONMENT`` variable picks the path when no environment is configured."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    resource = DataLoaderResource(config_path=str(snapshot_dir / "file_paths.yaml"))
    resource.setup_for_execution(dg.build_init_resource_context())

    assert resource.get_storage_path("spotify", "tracks") == str(snapshot_dir / "tracks.parquet")


def test_filter_kwargs_warns_on_ignored_arguments() -> None:
    """Test every dropped keyword argument is logged."""
    with patch("src.utils.data_loaders.logger") as mock_logger:
        filter_kwargs(pl.scan_csv, {"infer_schema_length": 100, "lazy": True})

    mock_logger.warning.assert_called_once()
    assert "'lazy'" in mock_logger.warning.call_args.args[0]
