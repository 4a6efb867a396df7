"""Tests for CSV export."""
from expense_filter.csv_validator import ingest
from expense_filter.export import encode, export_filename
from expense_filter.filters import filtered_rows


def test_encode_headers_and_rows():
    text = encode(["category", "amount"], [{"category": "food", "amount": 12.5}])

    assert text == "category,amount\r\nfood,12.5"


def test_encode_quotes_special_values():
    rows = [{"category": "food", "note": 'say "hi", twice\nok'}]

    text = encode(["category", "note"], rows)

    assert text == 'category,note\r\nfood,"say ""hi"", twice\nok"'


def test_encode_follows_header_order():
    text = encode(["amount", "category"], [{"category": "gas", "amount": 40}])

    assert text == "amount,category\r\n40,gas"


def test_encode_missing_key_is_empty():
    text = encode(["category", "amount", "note"], [{"category": "gas", "amount": 40}])

    assert text == "category,amount,note\r\ngas,40,"


def test_encode_headers_only():
    assert encode(["category", "amount"], []) == "category,amount"


def test_round_trip(settings):
    model = ingest(encode(["category", "amount"], [{"category": "food", "amount": 12.5}]), settings)

    assert len(model.rows) == 1
    assert model.rows[0]["category"] == "food"
    assert model.rows[0]["amount"] == 12.5


def test_round_trip_of_filtered_subset(settings, sample_csv_content):
    model = ingest(sample_csv_content, settings)
    subset = filtered_rows(model, frozenset({"food"}))

    reloaded = ingest(encode(model.headers, subset), settings)

    assert reloaded.headers == model.headers
    assert reloaded.rows == subset


def test_export_filename():
    assert export_filename("expenses.csv") == "expenses-filtered.csv"
    assert export_filename("March.CSV") == "March-filtered.csv"
    assert export_filename("data.csv.csv") == "data.csv-filtered.csv"
    assert export_filename("") == "export-filtered.csv"
