# liberadebt/errors.py
from typing import Optional


class LiberaDebtError(Exception):
    """Base class for every error that aborts a run."""


class SourceError(LiberaDebtError):
    """Spreadsheet could not be opened, or holds no data rows."""


class _RowError(LiberaDebtError):
    def __init__(self, row: Optional[int], field: str, message: str):
        self.row = row
        self.field = field
        where = f"row {row}, {field}" if row is not None else field
        super().__init__(f"{where}: {message}")


class ValidationError(_RowError):
    """A required field is blank."""

    def __init__(self, row: int, field: str, message: Optional[str] = None):
        super().__init__(row, field, message or "required value is missing")


class ParseError(_RowError):
    """A field has a value that can't be coerced to its type."""


class GenerationError(LiberaDebtError):
    """Exchange with the generation backend failed or was interrupted."""


class OutputError(LiberaDebtError, OSError):
    """Advice artifact could not be written."""
