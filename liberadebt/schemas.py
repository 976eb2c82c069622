# liberadebt/schemas.py
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List, Tuple

REQUIRED_FIELDS = ("description", "type", "monthly_payment")
NUMERIC_FIELDS = ("remaining_balance", "interest_rate", "monthly_payment")
OBLIGATION_FIELDS = (
    "description",
    "type",
    "institution",
    "remaining_balance",
    "interest_rate",
    "monthly_payment",
    "day_of_month",
)


class Obligation(BaseModel):
    """
    One recurring financial commitment read from a spreadsheet row.

    Optional fields stay None when the cell was blank, so an explicit 0 in the
    sheet is never confused with a missing value.
     - interest_rate holds the value as it was read (fraction or percent);
       normalize.py turns it into a two-decimal percentage.
    """
    model_config = ConfigDict(frozen=True)

    description: str = Field(min_length=1)
    type: str = Field(min_length=1)
    institution: Optional[str] = None
    remaining_balance: Optional[float] = Field(default=None, ge=0.0)
    interest_rate: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    monthly_payment: float = Field(ge=0.0)
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)


class ColumnLayout(BaseModel):
    """Spreadsheet column order: index i holds the field columns[i]."""
    model_config = ConfigDict(frozen=True)

    columns: Tuple[str, ...]

    @model_validator(mode="after")
    def check_columns(self) -> "ColumnLayout":
        unknown = [c for c in self.columns if c not in OBLIGATION_FIELDS]
        if unknown:
            raise ValueError(f"unknown columns: {', '.join(unknown)}")
        if len(set(self.columns)) != len(self.columns):
            raise ValueError("columns must not repeat")
        missing = [f for f in REQUIRED_FIELDS if f not in self.columns]
        if missing:
            raise ValueError(f"layout is missing required columns: {', '.join(missing)}")
        return self

    def index_of(self, field: str) -> Optional[int]:
        try:
            return self.columns.index(field)
        except ValueError:
            return None


FULL_LAYOUT = ColumnLayout(columns=OBLIGATION_FIELDS)
COMPACT_LAYOUT = ColumnLayout(columns=("description", "type", "monthly_payment"))


class ResponseBuffer(BaseModel):
    # text chunks in arrival order; complete is set once the stream has ended cleanly
    chunks: List[str] = Field(default_factory=list)
    complete: bool = False

    def append(self, chunk: str) -> None:
        if self.complete:
            raise RuntimeError("response buffer is already complete")
        self.chunks.append(chunk)

    def finish(self) -> None:
        self.complete = True

    @property
    def text(self) -> str:
        return "".join(self.chunks)


class RunParameters(BaseModel):
    income: float = Field(ge=0.0, allow_inf_nan=False)
    goal: str = Field(min_length=1)
    model: str = Field(min_length=1)
    source_path: str
    output_dir: str = "."
    exclude_thinking: bool = True
    layout: ColumnLayout = FULL_LAYOUT
