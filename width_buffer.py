import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from rows import Row, RowShapeError, Rows

log = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50


@dataclass
class Batch:
    rows: list[Row]
    widths: list[int]

    def __len__(self):
        return len(self.rows)


class ResizingRowBuffer:
    """Re-sizes columns as rows stream in, one batch at a time.

    Rows are pulled from the source ``batch_size`` at a time. Each batch gets
    a single width vector wide enough for its widest cell (plus one space) and
    is handed out as ``(row, widths)`` pairs. The next batch is only read once
    the current one has been consumed, so at most ``batch_size`` rows are held.

    The first row is the header. With ``carry_header_baseline`` the widths
    are a running maximum that starts from the header and only ever grows, so
    columns never narrow partway through a table. Without it the header only
    counts towards the first batch and every later batch is sized from zero.
    """

    def __init__(
        self,
        source: Rows,
        batch_size: int = DEFAULT_BATCH_SIZE,
        carry_header_baseline: bool = True,
        max_column_width: Optional[int] = 70,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.source = source
        self.batch_size = batch_size
        self.carry_header_baseline = carry_header_baseline
        self.max_column_width = max_column_width or None

        self.header: Optional[Row] = None
        self.batch: Optional[Batch] = None
        self.batches_read = 0
        self.widths: Optional[np.ndarray] = None
        self._pos = 0

    def has_next(self) -> bool:
        if self.batch is not None and self._pos < len(self.batch):
            return True
        return self.source.has_next()

    def _baseline(self, columns: int) -> np.ndarray:
        if self.carry_header_baseline and self.widths is not None:
            return self.widths
        if self.batches_read == 0:
            return np.array(self.header.sizes, dtype=np.int64) + 1
        return np.zeros(columns, dtype=np.int64)

    def _read_rows(self) -> list[Row]:
        rows: list[Row] = []
        while len(rows) < self.batch_size and self.source.has_next():
            row = self.source.next_row()
            if self.header is None:
                self.header = row
            elif len(row) != len(self.header):
                raise RowShapeError(
                    f"Row has {len(row)} values but the header has "
                    f"{len(self.header)} columns: {row.values!r}"
                )
            rows.append(row)
        return rows

    def compute_widths(self, rows: list[Row]) -> list[int]:
        columns = len(self.header)
        widths = self._baseline(columns)
        if columns and rows:
            sizes = np.array([row.sizes for row in rows], dtype=np.int64)
            widths = np.maximum(widths, sizes.max(axis=0) + 1)
        if self.max_column_width is not None:
            widths = np.minimum(widths, self.max_column_width)
        self.widths = widths
        return [int(w) for w in widths]

    def next_batch(self) -> Batch:
        rows = self._read_rows()
        if not rows:
            raise StopIteration
        widths = self.compute_widths(rows)
        self.batches_read += 1
        log.debug(
            "batch %d: %d rows, widths %s", self.batches_read, len(rows), widths
        )
        self.batch = Batch(rows, widths)
        self._pos = 0
        return self.batch

    def __iter__(self):
        return self

    def __next__(self) -> tuple[Row, list[int]]:
        if self.batch is None or self._pos >= len(self.batch):
            self.next_batch()
        row = self.batch.rows[self._pos]
        self._pos += 1
        return row, self.batch.widths
