"""
Errors raised while loading an uploaded CSV file.

Every ingestion failure carries exactly one user-facing ``message``; row
level failures also carry the 1-indexed line number in ``row``.
"""
from typing import Optional


class IngestionError(ValueError):
    """Base class for failures that reject an uploaded file."""

    def __init__(self, message: str, row: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.row = row


class UnsupportedFileTypeError(IngestionError):
    def __init__(self, file_name: str = ""):
        super().__init__("Invalid file type. Please upload CSV file.")
        self.file_name = file_name


class UnreadableInputError(IngestionError):
    def __init__(self, message: str = "Failed to read CSV file."):
        super().__init__(message)


class EmptyFileError(IngestionError):
    def __init__(self):
        super().__init__("CSV file has no data rows")


class MissingRequiredColumnError(IngestionError):
    def __init__(self, category_column: str, amount_column: str):
        super().__init__(
            f'CSV file must contain "{category_column}" and "{amount_column}" columns'
        )
        self.category_column = category_column
        self.amount_column = amount_column


class InconsistentColumnCountError(IngestionError):
    def __init__(self, row: int):
        super().__init__(f"Row {row} has inconsistent number of columns", row=row)


class InvalidCategoryValueError(IngestionError):
    def __init__(self, row: int, column: str):
        super().__init__(f"Row {row}: {column} must be a non-empty string", row=row)


class InvalidAmountValueError(IngestionError):
    def __init__(self, row: int, column: str):
        super().__init__(f"Row {row}: {column} must be a valid number", row=row)


class NoDataError(Exception):
    """Raised when a filter or export is requested before a file was loaded."""

    def __init__(self, message: str = "No file uploaded. Please upload a CSV first."):
        super().__init__(message)
        self.message = message
