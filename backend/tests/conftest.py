"""Pytest configuration and fixtures for testing the ExpenseFilter API."""
import pytest
from fastapi.testclient import TestClient

from expense_filter.config import Settings
from expense_filter.main import create_app


@pytest.fixture
def settings():
    """Settings with default column names and tracing disabled."""
    return Settings(
        category_column="category",
        amount_column="amount",
        locale="en_US",
        currency="USD",
        langfuse_public_key=None,
    )


@pytest.fixture
def client(settings):
    """Create a test client backed by a fresh session."""
    return TestClient(create_app(settings))


@pytest.fixture
def sample_csv_content():
    """Sample CSV content for testing."""
    return """category,amount,note
food,12.5,lunch
gas,40,
food,7.25,"coffee, beans"
rent,1000,"""


@pytest.fixture
def sample_csv_file(sample_csv_content, tmp_path):
    """Create a temporary CSV file for testing."""
    csv_file = tmp_path / "expenses.csv"
    csv_file.write_text(sample_csv_content)
    return csv_file


@pytest.fixture
def uploaded(client, sample_csv_file):
    """A client whose session already holds the sample file."""
    with open(sample_csv_file, "rb") as f:
        response = client.post("/upload", files={"file": ("expenses.csv", f, "text/csv")})
    assert response.status_code == 200
    return client
