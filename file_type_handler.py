import logging
import os
import sys

import pandas as pd

from rows import DataFrameRows

log = logging.getLogger(__name__)

SUPPORTED = {".csv", ".tsv", ".parquet", ".xlsx", ".h5"}


def _chunks(reader):
    with reader:
        yield from reader


def _read_delimited(source, sep, chunksize):
    try:
        reader = pd.read_csv(
            source, sep=sep, dtype=str, keep_default_na=True, chunksize=chunksize
        )
    except pd.errors.EmptyDataError:
        return []
    return _chunks(reader)


def stdin_rows(chunksize=50, primary_keys=(), status_column=None, null_value="NULL"):
    """Rows over CSV text read from standard input."""
    frames = _read_delimited(sys.stdin, ",", chunksize)
    return DataFrameRows(frames, primary_keys, status_column, null_value)


class FileTypeHandler:
    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in SUPPORTED:
            print("Unsupported file type (use .csv, .tsv, .parquet, .xlsx, or .h5)")
            sys.exit(1)

    def open_rows(
        self, chunksize=50, primary_keys=(), status_column=None, null_value="NULL"
    ) -> DataFrameRows:
        return DataFrameRows(
            self._frames(chunksize), primary_keys, status_column, null_value
        )

    def _frames(self, chunksize):
        if os.path.getsize(self.path) == 0:
            log.debug("%s is empty", self.path)
            return []

        if self.ext == ".csv":
            return _read_delimited(self.path, ",", chunksize)
        elif self.ext == ".tsv":
            return _read_delimited(self.path, "\t", chunksize)
        elif self.ext == ".parquet":
            self._ensure_parquet_engine()
            return [pd.read_parquet(self.path)]
        elif self.ext == ".xlsx":
            self._ensure_excel_engine()
            return [pd.read_excel(self.path, sheet_name=0)]
        return self._load_hdf()

    def _load_hdf(self):
        self._ensure_hdf_engine()
        with pd.HDFStore(self.path, mode="r") as store:
            keys = store.keys()
            if not keys:
                return []
            obj = store.get(keys[0])
        if isinstance(obj, pd.Series):
            obj = obj.to_frame()
        return [obj]

    def _ensure_parquet_engine(self):
        try:
            import pyarrow  # noqa: F401

            return
        except ImportError:
            pass
        print("Parquet support requires pyarrow. Install via: pip install pyarrow")
        sys.exit(1)

    def _ensure_excel_engine(self):
        try:
            import openpyxl  # noqa: F401

            return
        except ImportError:
            pass
        print("XLSX support requires openpyxl. Install via: pip install openpyxl")
        sys.exit(1)

    def _ensure_hdf_engine(self):
        try:
            import tables  # type: ignore  # noqa: F401

            return
        except ImportError:
            pass
        print("HDF5 support requires tables. Install via: pip install tables")
        sys.exit(1)
