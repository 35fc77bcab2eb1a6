"""Defines custom IOManagers for use with Dagster."""

from typing import Literal
from urllib.parse import urlparse

import fsspec
import polars as pl
from dagster import ConfigurableIOManager, InputContext, MetadataValue, OutputContext
from furl import furl
from loguru import logger


class PolarsFileIOManager(ConfigurableIOManager):
    """An IOManager persisting polars frames as one parquet or csv file per asset.

    Attributes
    ----------
    output_base_path : str
        Base path (local or any fsspec URL) where frames are written.
    storage_options : dict
        Options passed to fsspec when accessing remote storage.
    file_format : str
        ``parquet`` (default) or ``csv``.
    """

    output_base_path: str
    storage_options: dict = dict()  # noqa: RUF012
    file_format: Literal["parquet", "csv"] = "parquet"

    def _get_storage_path(self, context: InputContext | OutputContext) -> str:
        """
        Get the file path for an asset based on its key.

        Parameters
        ----------
        context : InputContext or OutputContext
            The Dagster context for the input or output operation.

        Returns
        -------
        str
            ``<output_base_path>/<key parts...>.<file_format>``
        """
        output_path = furl(self.output_base_path)
        *prefix, name = context.asset_key.path
        for segment in prefix:
            output_path.path.add(segment)
        output_path.path.add(f"{name}.{self.file_format}")
        return str(output_path)

    def _get_fs(self, path: str) -> fsspec.AbstractFileSystem:
        parsed = urlparse(path)
        if parsed.scheme in {"", "file"}:
            return fsspec.filesystem("file")
        return fsspec.filesystem(parsed.scheme, **self.storage_options)

    def handle_output(self, context: OutputContext, obj: pl.DataFrame | pl.LazyFrame) -> None:
        """Write a polars frame to the asset's file.

        Parameters
        ----------
        context : OutputContext
            The Dagster context for the output operation.
        obj : pl.DataFrame | pl.LazyFrame
            The frame to be written.

        Raises
        ------
        TypeError
            Raised when the provided data is of an unsupported type.
        """
        if isinstance(obj, pl.LazyFrame):
            obj = obj.collect()
        elif not isinstance(obj, pl.DataFrame):
            raise TypeError("Unsupported object type. Must be a polars LazyFrame or DataFrame.")

        with pl.Config(tbl_formatting="MARKDOWN", tbl_hide_column_data_types=True, tbl_hide_dataframe_shape=True):
            context.add_output_metadata({
                "df": MetadataValue.md(repr(obj.head())),
                "dagster/row_count": obj.height,
                "n_cols": obj.width,
            })

        path = self._get_storage_path(context)
        fs = self._get_fs(path)
        fs.makedirs(path.rsplit("/", 1)[0], exist_ok=True)

        with fs.open(path, "wb") as f:
            if self.file_format == "csv":
                obj.write_csv(f)
            else:
                obj.write_parquet(f)

        logger.info(f"Successfully wrote {obj.height} rows to {path}")

    def load_input(self, context: InputContext) -> pl.DataFrame:
        """Load the upstream asset's frame.

        Parameters
        ----------
        context : InputContext
            The Dagster context for the input operation.

        Returns
        -------
        pl.DataFrame
            The loaded frame.

        Raises
        ------
        FileNotFoundError
            If the upstream asset has not been materialised yet.
        """
        path = self._get_storage_path(context)
        fs = self._get_fs(path)
        if not fs.exists(path):
            raise FileNotFoundError(f"No materialisation found at {path}")

        with fs.open(path, "rb") as f:
            if self.file_format == "csv":
                return pl.read_csv(f, try_parse_dates=True)
            return pl.read_parquet(f)
