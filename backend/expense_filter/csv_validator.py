"""
CSV ingestion for uploaded expense files.

This module parses raw CSV text, resolves the category and amount columns by
name, and validates every row before a TableModel is produced. Validation is
fail-fast: the first problem found is raised as an IngestionError and no
partial model is ever built.
"""

import csv
import io
import logging
import math
import re
from typing import Iterator, List, Sequence

from .config import Settings
from .errors import (
    EmptyFileError,
    IngestionError,
    InconsistentColumnCountError,
    InvalidAmountValueError,
    InvalidCategoryValueError,
    MissingRequiredColumnError,
    UnreadableInputError,
    UnsupportedFileTypeError,
)
from .models import CellValue, Row, TableModel

logger = logging.getLogger(__name__)

# Number tokens: "12", "-3.5", ".5", "7.", "1e3" (surrounding whitespace allowed)
FLOAT_PATTERN = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")
INT_PATTERN = re.compile(r"^\s*-?\d+\s*$")

# Numbers outside +/-(2**53 - 1) are not exactly representable and stay strings
MAX_SAFE_INTEGER = 2**53 - 1

# The header occupies line 1
FIRST_DATA_LINE = 2


def coerce_cell(token: str) -> CellValue:
    """Convert a numeric-looking token to a number, leaving anything else a string."""
    if not FLOAT_PATTERN.match(token):
        return token
    value = float(token)
    if not -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER:
        return token
    if INT_PATTERN.match(token):
        return int(token)
    return value


def check_file_type(file_name: str) -> None:
    """Reject uploads whose name does not end in .csv."""
    if not file_name or not file_name.lower().endswith(".csv"):
        raise UnsupportedFileTypeError(file_name)


def decode_upload(contents: bytes) -> str:
    """Decode uploaded bytes as UTF-8, dropping a leading byte order mark."""
    try:
        return contents.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        logger.warning("Upload is not valid UTF-8: %s", exc)
        raise UnreadableInputError() from exc


def _is_blank(record: Sequence[str]) -> bool:
    return not record or all(not field.strip() for field in record)


def parse_records(raw_text: str) -> Iterator[List[str]]:
    """
    Yield the non-empty records of a CSV document.

    Raises:
        UnreadableInputError: If the csv module rejects the text
    """
    reader = csv.reader(io.StringIO(raw_text, newline=""), strict=True)
    try:
        for record in reader:
            if _is_blank(record):
                continue
            yield record
    except csv.Error as exc:
        logger.warning("CSV parse error at line %d: %s", reader.line_num, exc)
        raise UnreadableInputError() from exc


class CSVTableValidator:
    """
    Validates CSV rows against the file's header structure.

    The validator is initialized with the CSV headers so the category and
    amount columns are resolved once, before any row is checked.
    """

    def __init__(self, headers: Sequence[str], settings: Settings):
        """
        Initialize the validator with CSV headers.

        Args:
            headers: Column names from the CSV header row, in file order
            settings: Supplies the configured category and amount column names

        Raises:
            MissingRequiredColumnError: If either configured column is absent
        """
        self.headers = tuple(headers)
        self.settings = settings

        normalized = [h.strip().lower() for h in self.headers]
        category_index = self._find(normalized, settings.category_column)
        amount_index = self._find(normalized, settings.amount_column)
        if category_index is None or amount_index is None:
            raise MissingRequiredColumnError(
                settings.category_column, settings.amount_column
            )

        self.category_header = self.headers[category_index]
        self.amount_header = self.headers[amount_index]

    @staticmethod
    def _find(normalized: List[str], name: str):
        try:
            return normalized.index(name)
        except ValueError:
            return None

    def validate_record(self, record: Sequence[str], line_number: int) -> Row:
        """
        Coerce and validate one data record.

        Args:
            record: Raw field strings from the csv reader
            line_number: 1-indexed line number reported in errors

        Returns:
            The row as a mapping of header to coerced value
        """
        if len(record) != len(self.headers):
            raise InconsistentColumnCountError(line_number)

        row = {header: coerce_cell(field) for header, field in zip(self.headers, record)}

        category = row[self.category_header]
        if not isinstance(category, str) or not category.strip():
            raise InvalidCategoryValueError(line_number, self.settings.category_column)

        amount = row[self.amount_header]
        if not isinstance(amount, (int, float)) or not math.isfinite(amount):
            raise InvalidAmountValueError(line_number, self.settings.amount_column)

        return row

    def build(self, records: Sequence[Sequence[str]]) -> TableModel:
        """Validate every record in order and assemble the table."""
        rows = [
            self.validate_record(record, offset + FIRST_DATA_LINE)
            for offset, record in enumerate(records)
        ]
        return TableModel(
            headers=self.headers,
            rows=tuple(rows),
            category_header=self.category_header,
            amount_header=self.amount_header,
        )


def ingest(raw_text: str, settings: Settings) -> TableModel:
    """
    Parse and validate CSV text into a TableModel.

    Args:
        raw_text: Complete contents of the uploaded file
        settings: Supplies the configured column names

    Returns:
        The validated table

    Raises:
        IngestionError: The first problem found, with a user-facing message
    """
    records = list(parse_records(raw_text))
    if len(records) < 2:
        logger.warning("Rejected CSV: no data rows")
        raise EmptyFileError()

    headers, data = records[0], records[1:]
    try:
        validator = CSVTableValidator(headers, settings)
        model = validator.build(data)
    except IngestionError as exc:
        logger.warning("Rejected CSV: %s", exc.message)
        raise

    logger.info(
        "Loaded CSV with %d rows (category=%r, amount=%r)",
        len(model.rows),
        model.category_header,
        model.amount_header,
    )
    return model
