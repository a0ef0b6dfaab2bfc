"""
loader.csv_parser - Low-level CSV reading and cleaning.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Header whitespace stripping
  • Dropping fully blank rows
  • Returns the whole file as a Table (headers + positional rows)
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field

from loader.errors import EmptyFileError


@dataclass
class Table:
    headers: list[str]
    rows: list[list[str]] = field(default_factory=list)


def read_table(raw: str | bytes) -> Table:
    """
    Accept raw file content (bytes or str), clean it, and return a Table.
    Raises EmptyFileError if there is no header row.
    """
    text = _decode(raw)
    if not text or not text.strip():
        raise EmptyFileError("CSV has no header row or is empty")

    reader = csv.reader(io.StringIO(text))
    headers = next(reader, None)
    if not headers or not any(h.strip() for h in headers):
        raise EmptyFileError("CSV has no header row or is empty")

    rows = [row for row in reader if any((cell or "").strip() for cell in row)]
    return Table(headers=[h.strip() for h in headers], rows=rows)


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode("utf-8", errors="replace")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw
