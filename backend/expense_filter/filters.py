"""
Category filtering and amount aggregation over a loaded table.

All functions are pure and recompute from scratch on every call.
"""
from typing import Iterable, List, Sequence, Tuple, Union

from .config import Settings
from .formatting import display_row, format_currency
from .models import FilterSet, FilterSummary, Row, TableModel

EMPTY_FILTER: FilterSet = frozenset()


def available_categories(model: TableModel) -> List[str]:
    """Distinct category values in first-occurrence order."""
    seen = dict.fromkeys(row[model.category_header] for row in model.rows)
    return list(seen)


def filtered_rows(model: TableModel, filter_set: FilterSet) -> Tuple[Row, ...]:
    """Rows whose category is selected; every row when nothing is selected."""
    if not filter_set:
        return model.rows
    return tuple(row for row in model.rows if row[model.category_header] in filter_set)


def total_amount(rows: Iterable[Row], amount_header: str) -> Union[int, float]:
    return sum((row[amount_header] for row in rows), 0)


def toggle(filter_set: FilterSet, category: str) -> FilterSet:
    """Select the category if it is not selected, otherwise deselect it."""
    return frozenset(filter_set ^ {category})


def summarize(model: TableModel, filter_set: FilterSet, settings: Settings) -> FilterSummary:
    """
    Build everything the display layer needs for the current filter.

    The selected categories are reported in the order they appear in the data.
    """
    categories = available_categories(model)
    rows = filtered_rows(model, filter_set)
    total = total_amount(rows, model.amount_header)
    return FilterSummary(
        available_categories=categories,
        selected=[c for c in categories if c in filter_set],
        filter_needed=len(categories) > 1,
        rows=list(rows),
        display_rows=_display_rows(rows, model.headers, settings),
        headers=list(model.headers),
        total_filtered=len(rows),
        total_data=len(model.rows),
        total_amount=total,
        total_amount_display=format_currency(total, settings),
    )


def _display_rows(rows: Sequence[Row], headers: Sequence[str], settings: Settings):
    return [display_row(row, headers, settings) for row in rows]
