# liberadebt/ingest.py
import logging
import math
import os
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd
from pydantic import ValidationError as PydanticValidationError

from .errors import ParseError, SourceError, ValidationError
from .schemas import FULL_LAYOUT, NUMERIC_FIELDS, REQUIRED_FIELDS, ColumnLayout, Obligation
from .utils import clean_number_text, is_blank

logger = logging.getLogger(__name__)


def read_rows(path: str) -> List[List[Any]]:
    """Read the first sheet of a workbook (or a CSV file) as raw cell rows, header included."""
    if not os.path.isfile(path):
        raise SourceError(f"obligations spreadsheet not found: {path}")
    name = path.lower()
    try:
        if name.endswith(".csv"):
            df = pd.read_csv(path, header=None, dtype=str, keep_default_na=False, skip_blank_lines=False)
        else:
            df = pd.read_excel(path, sheet_name=0, header=None, dtype=object)
    except pd.errors.EmptyDataError:
        raise SourceError(f"obligations spreadsheet is empty: {path}") from None
    except Exception as e:
        raise SourceError(f"error opening spreadsheet {path}: {e}") from e
    return df.values.tolist()


def _text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        # numeric-looking labels come back from Excel as floats
        return str(int(value))
    return str(value).strip()


def _number(value: Any, row: int, field: str) -> float:
    if isinstance(value, bool):
        raise ParseError(row, field, f"expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(clean_number_text(str(value)))
        except ValueError:
            raise ParseError(row, field, f"expected a number, got {value!r}") from None
    if math.isnan(number) or math.isinf(number):
        raise ParseError(row, field, f"expected a finite number, got {value!r}")
    return number


def _whole_number(value: Any, row: int, field: str) -> int:
    number = _number(value, row, field)
    if not number.is_integer():
        raise ParseError(row, field, f"expected a whole number, got {value!r}")
    return int(number)


def _cells(row: Sequence[Any], layout: ColumnLayout) -> Dict[str, Any]:
    return {field: (row[i] if i < len(row) else None) for i, field in enumerate(layout.columns)}


def parse_row(cells: Dict[str, Any], row: int) -> Obligation:
    for field in REQUIRED_FIELDS:
        if is_blank(cells.get(field)):
            raise ValidationError(row, field)

    values: Dict[str, Any] = {}
    for field, raw in cells.items():
        if is_blank(raw):
            continue
        if field in NUMERIC_FIELDS:
            values[field] = _number(raw, row, field)
        elif field == "day_of_month":
            values[field] = _whole_number(raw, row, field)
        else:
            values[field] = _text(raw)

    try:
        return Obligation(**values)
    except PydanticValidationError as e:
        err = e.errors()[0]
        field = str(err["loc"][0]) if err.get("loc") else "row"
        raise ParseError(row, field, err["msg"]) from None


def ingest_rows(rows: Iterable[Sequence[Any]], layout: Optional[ColumnLayout] = None) -> List[Obligation]:
    """
    Turn raw rows (header first) into Obligation records, in row order.

    Row numbers in errors are 1-based source rows, so the header is row 1.
    Rows whose cells are all blank are skipped but still counted.
    """
    layout = layout or FULL_LAYOUT
    rows = list(rows)
    if len(rows) < 2:
        raise SourceError("no obligations (data rows) exist in the spreadsheet")

    obligations: List[Obligation] = []
    for row_number, row in enumerate(rows[1:], start=2):
        cells = _cells(row, layout)
        if all(is_blank(v) for v in cells.values()):
            logger.debug("Skipping blank row %d", row_number)
            continue
        obligation = parse_row(cells, row_number)
        logger.debug("Row %d: %s", row_number, obligation.description)
        obligations.append(obligation)

    if not obligations:
        raise SourceError("spreadsheet holds only blank rows below the header")
    logger.info("Read %d obligations", len(obligations))
    return obligations


def load_obligations(path: str, layout: Optional[ColumnLayout] = None) -> List[Obligation]:
    return ingest_rows(read_rows(path), layout)
