"""Tests for category filtering and totals."""
import pytest

from expense_filter.csv_validator import ingest
from expense_filter.filters import (
    EMPTY_FILTER,
    available_categories,
    filtered_rows,
    summarize,
    toggle,
    total_amount,
)


@pytest.fixture
def model(settings, sample_csv_content):
    return ingest(sample_csv_content, settings)


class TestAvailableCategories:
    def test_first_occurrence_order(self, model):
        assert available_categories(model) == ["food", "gas", "rent"]

    def test_categories_are_case_sensitive(self, settings):
        model = ingest("category,amount\nFood,1\nfood,2\nFood,3\n", settings)

        assert available_categories(model) == ["Food", "food"]


class TestFilteredRows:
    def test_empty_filter_returns_all_rows(self, model):
        assert filtered_rows(model, EMPTY_FILTER) is model.rows

    def test_filter_preserves_order(self, model):
        rows = filtered_rows(model, frozenset({"food"}))

        assert [row["note"] for row in rows] == ["lunch", "coffee, beans"]
        assert all(row["category"] == "food" for row in rows)

    def test_multiple_categories(self, model):
        rows = filtered_rows(model, frozenset({"rent", "gas"}))

        assert [row["category"] for row in rows] == ["gas", "rent"]

    def test_unknown_category_matches_nothing(self, model):
        assert filtered_rows(model, frozenset({"travel"})) == ()


class TestTotals:
    def test_total_of_filtered_rows(self, model):
        rows = filtered_rows(model, frozenset({"food"}))

        assert total_amount(rows, model.amount_header) == 12.5 + 7.25

    def test_total_of_all_rows(self, model):
        assert total_amount(model.rows, model.amount_header) == 1059.75

    def test_total_of_no_rows(self):
        assert total_amount([], "amount") == 0


class TestToggle:
    def test_adds_then_removes(self):
        selected = toggle(EMPTY_FILTER, "food")
        assert selected == {"food"}

        assert toggle(selected, "food") == EMPTY_FILTER

    def test_self_inverse(self):
        start = frozenset({"gas", "rent"})

        for category in ["food", "gas"]:
            assert toggle(toggle(start, category), category) == start

    def test_does_not_mutate_input(self):
        start = frozenset({"gas"})
        toggle(start, "food")

        assert start == {"gas"}


class TestSummarize:
    def test_unfiltered_summary(self, model, settings):
        summary = summarize(model, EMPTY_FILTER, settings)

        assert summary.available_categories == ["food", "gas", "rent"]
        assert summary.selected == []
        assert summary.filter_needed is True
        assert summary.total_filtered == 4
        assert summary.total_data == 4
        assert summary.total_amount == 1059.75
        assert summary.total_amount_display == "$1,059.75"
        assert summary.headers == ["category", "amount", "note"]

    def test_filtered_summary(self, model, settings):
        summary = summarize(model, frozenset({"rent", "food"}), settings)

        assert summary.selected == ["food", "rent"]
        assert summary.total_filtered == 3
        assert summary.total_data == 4
        assert summary.total_amount == 1019.75
        assert summary.display_rows[2] == {
            "category": "rent",
            "amount": "$1,000.00",
            "note": "",
        }

    def test_single_category_needs_no_filter(self, settings):
        model = ingest("category,amount\nfood,1\nfood,2\n", settings)

        assert summarize(model, EMPTY_FILTER, settings).filter_needed is False
