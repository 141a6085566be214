"""CSV / Parquet writers for sweep rows and column blocks."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TextIO

import pyarrow as pa
import pyarrow.csv as pacsv
import pyarrow.parquet as pq

logger = logging.getLogger(__name__)

TableSink = TextIO | str | Path


class EmptyResultError(RuntimeError):
    """No rows were produced, so there is no header to write."""


def _write_table(table: pa.Table, sink: TableSink) -> None:
    if isinstance(sink, (str, Path)):
        path = Path(sink)
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix == ".parquet":
            pq.write_table(table, path)
        else:
            pacsv.write_csv(table, str(path))
        logger.info("wrote %d rows to %s", table.num_rows, path)
        return
    buffer = pa.BufferOutputStream()
    pacsv.write_csv(table, buffer)
    sink.write(buffer.getvalue().to_pybytes().decode("utf-8"))
    sink.flush()


def _uniform_column(key: str, values: Sequence[object]) -> list[object]:
    """Stringify a column whose non-null cells do not share one type.

    Ints and floats mix freely; any other combination (e.g. raw values of an
    option that could not be bound) is written as text.
    """
    kinds = {type(v) for v in values if v is not None}
    if len(kinds) <= 1 or kinds <= {int, float}:
        return list(values)
    names = sorted(k.__name__ for k in kinds)
    logger.warning("column %s mixes %s; writing it as text", key, names)
    return [None if v is None else str(v) for v in values]


def write_rows(rows: Sequence[Mapping[str, object]], sink: TableSink) -> None:
    """Write *rows* with a header taken from the first row's keys.

    Keys missing from later rows are written as nulls; keys absent from the
    first row are dropped.
    """
    if not rows:
        raise EmptyResultError("no rows to write")
    header = list(rows[0].keys())
    columns = {key: [row.get(key) for row in rows] for key in header}
    write_columns(columns, sink)


def write_columns(columns: Mapping[str, Sequence[object]], sink: TableSink) -> None:
    """Write equal-length *columns* in mapping order."""
    if not columns:
        raise EmptyResultError("no columns to write")
    lengths = {len(values) for values in columns.values()}
    if len(lengths) != 1:
        raise ValueError(f"columns must have equal lengths, got {sorted(lengths)}")
    table = pa.table({key: _uniform_column(key, values) for key, values in columns.items()})
    _write_table(table, sink)
