"""Data Loader resource resolving snapshot paths from YAML configuration and loading them with polars."""

import os
from typing import Any

import dagster as dg
import polars as pl
from pydantic import PrivateAttr

from src.utils.data_loaders import PolarsDataLoader, load_path_config, resolve_storage_path


class DataLoaderResource(dg.ConfigurableResource):
    """
    Combined DataLoader that loads the path configuration and reads snapshots as polars frames.

    Parameters
    ----------
        config_path : str
            The path to the YAML configuration file.
        environment : str | None
            The environment entry to resolve paths for. Defaults to the ``ENVIRONMENT``
            variable, then ``local``.
    """

    config_path: str
    environment: str | None = None
    _env: str = PrivateAttr()
    _config: dict[str, Any] = PrivateAttr()

    def setup_for_execution(self, context: dg.InitResourceContext) -> None:  # noqa: ARG002
        """Set up the class attributes when calling the Dagster resource.

        Args:
            context (dg.InitResourceContext): The resource initialisation context.
        """
        self._env = self.environment or os.getenv("ENVIRONMENT", "local")
        self._config = load_path_config(self.config_path)

    def get_storage_path(self, dataset_name: str, table_name: str) -> str:
        """
        Retrieve the storage path of a table for the current environment.

        Parameters
        ----------
        dataset_name : str
            The top-level dataset name (e.g., 'spotify').
        table_name : str
            The specific table name (e.g., 'tracks').

        Returns
        -------
        str
            The resolved file path.
        """
        return resolve_storage_path(self._config, dataset_name, table_name, self._env)

    def load_data(self, dataset_name: str, table_name: str, lazy: bool = False, **kwargs: Any) -> pl.DataFrame | pl.LazyFrame:
        """
        Load data for a specific dataset and table.

        Parameters
        ----------
        dataset_name : str
            The top-level dataset name.
        table_name : str
            The specific table name.
        lazy : bool, optional
            Return the ``pl.LazyFrame`` instead of materialising it, by default False.
        **kwargs : dict[str, Any]
            Additional keyword arguments passed to the polars reader.

        Returns
        -------
        pl.DataFrame | pl.LazyFrame
            The loaded snapshot.

        Examples
        --------
        >>> loader = DataLoaderResource(config_path="config/file_paths.yaml")
        >>> tracks = loader.load_data("spotify", "tracks", infer_schema_length=10000)
        """
        file_path = self.get_storage_path(dataset_name, table_name)
        data = PolarsDataLoader().load(file_path, **kwargs)

        if lazy:
            return data
        return data.collect()
