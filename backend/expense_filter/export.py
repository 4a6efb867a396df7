"""CSV export of the filtered rows."""
import csv
import io
from pathlib import PurePath
from typing import Iterable, Sequence

from .models import Row

LINE_TERMINATOR = "\r\n"


def encode(headers: Sequence[str], rows: Iterable[Row]) -> str:
    """
    Serialize rows as CSV text with the headers on the first line.

    Values containing the delimiter, a quote or a line break are quoted.
    Keys missing from a row are written as empty fields. The text has no
    trailing line terminator.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator=LINE_TERMINATOR)
    writer.writerow(headers)
    for row in rows:
        writer.writerow([row.get(header, "") for header in headers])
    text = buffer.getvalue()
    return text[: -len(LINE_TERMINATOR)]


def export_filename(file_name: str) -> str:
    """Suggested download name, e.g. "expenses.csv" -> "expenses-filtered.csv"."""
    stem = PurePath(file_name).name
    if stem.lower().endswith(".csv"):
        stem = stem[:-4]
    return f"{stem or 'export'}-filtered.csv"
