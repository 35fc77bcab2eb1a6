"""Data Loader supporting csv and parquet snapshots and producing polars DataFrames/LazyFrames."""

import inspect
from collections.abc import Callable
from enum import Enum
from typing import Any
from urllib.parse import urlparse

import fsspec
import polars as pl
import yaml
from loguru import logger


class FileFormat(Enum):
    """Enum representing supported file formats."""

    CSV = "csv"
    PARQUET = "parquet"
    UNKNOWN = "unknown"


def filter_kwargs(func: Callable, kwargs: dict[str, Any]) -> dict[str, Any]:
    """
    Filter keyword arguments to only include those accepted by the target reader.

    Parameters
    ----------
    func : Callable
        The reader whose signature is used to filter the keyword arguments.
    kwargs : dict[str, Any]
        Keyword arguments to be filtered.

    Returns
    -------
    dict[str, Any]
        Only the keyword arguments accepted by ``func``. The others are logged and ignored.

    Examples
    --------
    >>> def read(source, separator=","):
    ...     return source
    >>> filter_kwargs(read, {"separator": ";", "lazy": True})
    {'separator': ';'}
    """
    valid_keys = set(inspect.signature(func).parameters)
    filtered = {}
    for key, value in kwargs.items():
        if key in valid_keys:
            filtered[key] = value
        else:
            logger.warning(f"Keyword argument '{key}' is not valid for '{func.__name__}'. It will be ignored")
    return filtered


class PolarsDataLoader:
    """
    Loader producing a polars LazyFrame from a csv or parquet snapshot.

    Data is scanned lazily and only materialised by the caller.
    """

    def __init__(self, storage_options: dict[str, Any] | None = None) -> None:
        self.storage_options = storage_options or {}

    def _get_fs(self, file_path: str) -> fsspec.AbstractFileSystem:
        parsed = urlparse(file_path)
        if parsed.scheme in {"", "file"}:
            return fsspec.filesystem("file")
        return fsspec.filesystem(parsed.scheme, **self.storage_options)

    def _infer_data_format(self, file_path: str) -> FileFormat:
        """
        Infer the data format from the file extension.

        Parameters
        ----------
        file_path : str
            The path to the snapshot.

        Returns
        -------
        FileFormat
            The inferred format, ``FileFormat.UNKNOWN`` when the extension is not supported.
        """
        lowercase_file_path = file_path.lower()

        if lowercase_file_path.endswith(".csv"):
            input_data_format = FileFormat.CSV
        elif lowercase_file_path.endswith(".parquet"):
            input_data_format = FileFormat.PARQUET
        else:
            input_data_format = FileFormat.UNKNOWN

        logger.info(f"Inferring file format of {file_path}. Determined to be of type {input_data_format}.")
        return input_data_format

    def load(self, file_path: str, **kwargs: Any) -> pl.LazyFrame:
        """
        Scan the snapshot at ``file_path``.

        Parameters
        ----------
        file_path : str
            Local path or fsspec URL of the snapshot.
        **kwargs : dict[str, Any]
            Additional keyword arguments passed to ``pl.scan_csv`` / ``pl.scan_parquet``,
            for example ``separator`` or ``infer_schema_length``.

        Returns
        -------
        pl.LazyFrame
            The snapshot, not yet materialised.

        Raises
        ------
        FileNotFoundError
            If nothing exists at ``file_path``.
        ValueError
            If the file format is unsupported.
        """
        if not self._get_fs(file_path).exists(file_path):
            raise FileNotFoundError(f"No snapshot found at {file_path}")

        input_format = self._infer_data_format(file_path=file_path)

        if input_format == FileFormat.CSV:
            valid_kwargs = filter_kwargs(pl.scan_csv, kwargs)
            return pl.scan_csv(file_path, storage_options=self.storage_options or None, **valid_kwargs)

        if input_format == FileFormat.PARQUET:
            valid_kwargs = filter_kwargs(pl.scan_parquet, kwargs)
            return pl.scan_parquet(file_path, storage_options=self.storage_options or None, **valid_kwargs)

        raise ValueError(f"Unsupported format for PolarsDataLoader: {input_format}")


def resolve_storage_path(config: dict[str, Any], dataset_name: str, table_name: str, env: str) -> str:
    """
    Look up a storage path in a loaded path configuration using a two-layer design.

    Parameters
    ----------
    config : dict[str, Any]
        Parsed configuration with a top-level ``paths`` key.
    dataset_name : str
        The top-level dataset name (e.g. 'spotify').
    table_name : str
        The specific table name (e.g. 'tracks').
    env : str
        The environment entry to read (e.g. 'local').

    Returns
    -------
    str
        The resolved file path.

    Raises
    ------
    KeyError
        If the configuration is malformed or the dataset, table or environment is not found.
    """
    if "paths" not in config:
        raise KeyError("Malformed configuration file. Expecting `paths` top-level key.")

    if dataset_name not in config["paths"]:
        raise KeyError(f"Cannot find entries for dataset {dataset_name} in paths configuration.")

    if table_name not in config["paths"][dataset_name]:
        raise KeyError(f"Cannot find entry for table {table_name} within dataset {dataset_name}")

    if env not in config["paths"][dataset_name][table_name]:
        raise KeyError(f"Cannot find entry for environment {env} within table {dataset_name}.{table_name}")

    return config["paths"][dataset_name][table_name][env]


def load_path_config(config_path: str) -> dict[str, Any]:
    """Read the YAML path configuration."""
    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)
