import enum
from dataclasses import dataclass, field
from typing import Iterable, Optional

import pandas as pd


class RowShapeError(ValueError):
    """A row does not line up with the table it belongs to."""


class RowStatus(enum.Enum):
    NORMAL = "normal"
    DELETED = "deleted"
    UPDATED = "updated"
    INSERTED = "inserted"

    @classmethod
    def parse(cls, value) -> "RowStatus":
        if value is None or (not isinstance(value, str) and pd.isna(value)):
            return cls.NORMAL
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NORMAL


@dataclass(frozen=True)
class Row:
    values: tuple
    is_meta: bool = False
    status: RowStatus = RowStatus.NORMAL
    sizes: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        values = tuple(v if isinstance(v, str) else str(v) for v in self.values)
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "sizes", tuple(len(v) for v in self.values))

    def __len__(self):
        return len(self.values)


_EXHAUSTED = object()


def cell_text(value, null_value: str = "NULL") -> str:
    if value is None:
        return null_value
    if not isinstance(value, str):
        try:
            if pd.isna(value):
                return null_value
        except (TypeError, ValueError):
            # array-like cells have no single truth value
            pass
    return str(value)


class Rows:
    """Forward-only, single-pass source of table rows.

    The first row produced is the header (meta) row, followed by one row per
    record. Records may be ``Row`` objects (to carry a status) or plain
    sequences of values. A ``header`` of None describes an empty source.
    """

    def __init__(
        self,
        header: Optional[Iterable],
        records: Iterable = (),
        primary_keys: Iterable = (),
        null_value: str = "NULL",
    ):
        self.null_value = null_value
        self._records = iter(records)
        if header is None:
            self._header = None
            self._pending = _EXHAUSTED
            self._done = True
        else:
            self._header = Row(
                [cell_text(h, null_value) for h in header], is_meta=True
            )
            self._pending = self._header
            self._done = False
        self._primary_keys = self._resolve_primary_keys(primary_keys)

    @property
    def header(self) -> Optional[Row]:
        return self._header

    def _resolve_primary_keys(self, primary_keys) -> frozenset:
        keys = set()
        names = list(self._header.values) if self._header is not None else []
        for key in primary_keys or ():
            if isinstance(key, int) and not isinstance(key, bool):
                keys.add(key)
            elif str(key) in names:
                keys.add(names.index(str(key)))
            else:
                raise KeyError(f"Unknown primary key column: {key!r}")
        return frozenset(keys)

    def is_primary_key(self, index: int) -> bool:
        return index in self._primary_keys

    def _to_row(self, record) -> Row:
        if isinstance(record, Row):
            return record
        return Row([cell_text(v, self.null_value) for v in record])

    def _pull(self):
        try:
            record = next(self._records)
        except StopIteration:
            return _EXHAUSTED
        return self._to_row(record)

    def has_next(self) -> bool:
        if self._done:
            return False
        if self._pending is None:
            self._pending = self._pull()
        if self._pending is _EXHAUSTED:
            self._done = True
            return False
        return True

    def next_row(self) -> Row:
        if not self.has_next():
            raise StopIteration
        row = self._pending
        self._pending = None
        return row

    def close(self) -> None:
        """Stop reading and release whatever the records come from."""
        self._pending = _EXHAUSTED
        self._done = True
        close = getattr(self._records, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __iter__(self):
        return self

    def __next__(self) -> Row:
        return self.next_row()


class DataFrameRows(Rows):
    """Rows over an iterable of DataFrames, read one chunk at a time.

    ``frames`` may be a single DataFrame or any iterable of them, such as the
    reader returned by ``pd.read_csv(..., chunksize=n)``. When
    ``status_column`` is given its values decide each row's status and the
    column itself is not displayed.
    """

    def __init__(
        self,
        frames,
        primary_keys: Iterable = (),
        status_column: Optional[str] = None,
        null_value: str = "NULL",
    ):
        if isinstance(frames, pd.DataFrame):
            frames = [frames]
        self._source = frames
        self._frames = iter(frames)
        self.status_column = status_column

        first = next(self._frames, None)
        if first is None or first.shape[1] == 0:
            self._close_frames()
            super().__init__(None, (), (), null_value)
            return

        columns = [str(c) for c in first.columns]
        try:
            if status_column is not None and status_column not in columns:
                raise KeyError(f"Unknown status column: {status_column!r}")
            header = [c for c in columns if c != status_column]
            super().__init__(
                header, self._records_from(first), primary_keys, null_value
            )
        except KeyError:
            self._close_frames()
            raise

    def _close_frames(self) -> None:
        # a chunked reader hands out a separate iterator; close both
        owners = [self._frames]
        if self._source is not self._frames:
            owners.append(self._source)
        for obj in owners:
            close = getattr(obj, "close", None)
            if close is not None:
                close()

    def close(self) -> None:
        super().close()
        self._close_frames()

    def _records_from(self, first: pd.DataFrame):
        chunk = first
        while chunk is not None:
            yield from self._chunk_rows(chunk)
            chunk = next(self._frames, None)

    def _chunk_rows(self, chunk: pd.DataFrame):
        columns = [str(c) for c in chunk.columns]
        status_idx = (
            columns.index(self.status_column)
            if self.status_column is not None
            else None
        )
        for values in chunk.itertuples(index=False, name=None):
            status = RowStatus.NORMAL
            if status_idx is not None:
                status = RowStatus.parse(values[status_idx])
                values = values[:status_idx] + values[status_idx + 1 :]
            yield Row(
                [cell_text(v, self.null_value) for v in values], status=status
            )
