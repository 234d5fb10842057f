from __future__ import annotations

import csv
import os
import sys
import tempfile
from contextlib import contextmanager
from typing import IO, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple


def read_table(stream: IO[str]) -> Tuple[List[str], Iterator[Dict[str, str]]]:
    """Return the header and a lazy iterator of rows keyed by column name.

    Short rows are padded with empty strings. Raises ValueError when the
    stream has no header row, and while iterating when a record has more
    fields than the header.
    """
    reader = csv.DictReader(stream, restval="")
    if not reader.fieldnames:
        raise ValueError("CSV input has no header row")
    return list(reader.fieldnames), _checked_rows(reader)


def _checked_rows(reader: csv.DictReader) -> Iterator[Dict[str, str]]:
    for row in reader:
        # DictReader files surplus cells under the None key
        if None in row:
            raise ValueError(
                f"line {reader.line_num}: record has {len(reader.fieldnames) + len(row[None])} fields, "
                f"header has {len(reader.fieldnames)}"
            )
        yield row


@contextmanager
def open_table(path: str) -> Iterator[Tuple[List[str], Iterator[Dict[str, str]]]]:
    # utf-8-sig drops the BOM spreadsheet exports like to add
    with open(path, "r", newline="", encoding="utf-8-sig") as f:
        yield read_table(f)


@contextmanager
def open_output(path: Optional[str]) -> Iterator[IO[str]]:
    """Yield a writable text stream: the file at ``path`` or stdout when None.

    File output goes to a temporary file beside ``path`` that replaces it
    only when the block completes, so a failed run leaves no partial file.
    """
    if path is None:
        yield sys.stdout
        sys.stdout.flush()
        return
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".mgrs2latlong-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
            yield f
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def write_table(stream: IO[str], header: Sequence[str], rows: Iterable[Mapping[str, str]]) -> int:
    writer = csv.DictWriter(stream, fieldnames=list(header), extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    n = 0
    for row in rows:
        writer.writerow(row)
        n += 1
    return n


__all__ = ["read_table", "open_table", "open_output", "write_table"]
