# Data models for the expense filter application
from typing import Dict, FrozenSet, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, model_validator

CellValue = Union[str, int, float]
Row = Dict[str, CellValue]
FilterSet = FrozenSet[str]


class TableModel(BaseModel):
    """Validated contents of an uploaded CSV file."""

    model_config = ConfigDict(frozen=True)

    headers: Tuple[str, ...]
    rows: Tuple[Row, ...]
    category_header: str
    amount_header: str

    @model_validator(mode="after")
    def check_designated_headers(self) -> "TableModel":
        for header in (self.category_header, self.amount_header):
            if header not in self.headers:
                raise ValueError(f"{header!r} is not one of the table headers")
        return self


class FilterSummary(BaseModel):
    available_categories: List[str]
    selected: List[str]
    filter_needed: bool
    rows: List[Row]
    display_rows: List[Dict[str, str]]
    headers: List[str]
    total_filtered: int
    total_data: int
    total_amount: float
    total_amount_display: str


class ToggleRequest(BaseModel):
    category: str


class SessionStatus(BaseModel):
    file_name: str
    error: str
    loaded: bool


class ColumnConfig(BaseModel):
    category_column: str
    amount_column: str
    locale: str
    currency: str
