"""
Tests for the storage layer.

The JSON file backend is exercised against real files in tmp_path.
"""

import json

import pytest

from expense_tracker.models.expense import ExpenseList
from expense_tracker.services.storage import (
    CORRUPT_STORE_WARNING,
    InMemoryExpenseStorage,
    JsonFileExpenseStorage,
    StorageError,
    load_expenses,
    save_expenses,
)


@pytest.fixture
def sample_expenses():
    return ExpenseList.model_validate([
        {"id": 1, "date": "2024-12-01", "description": "Coffee", "amount": 3.5},
        {"id": 3, "date": "2024-12-02", "description": "Groceries", "amount": 42.0},
        {"id": 4, "date": "2024-12-05", "description": "Bus ticket", "amount": 2.75},
    ])


class TestLoadExpenses:
    """Tests for load_expenses."""

    def test_missing_file_gives_empty_list(self, tmp_path):
        assert len(load_expenses(tmp_path / "expenses.json")) == 0

    def test_empty_file_gives_empty_list(self, tmp_path, capsys):
        """Test that an empty file is not reported as corrupt."""
        path = tmp_path / "expenses.json"
        path.write_text("")
        assert len(load_expenses(path)) == 0
        assert capsys.readouterr().err == ""

    def test_not_json_warns_and_gives_empty_list(self, tmp_path, capsys):
        """Test that garbage is discarded with a warning, not a crash."""
        path = tmp_path / "expenses.json"
        path.write_text("not json")
        expenses = load_expenses(path)
        assert len(expenses) == 0
        assert expenses.next_id() == 1
        assert CORRUPT_STORE_WARNING in capsys.readouterr().err

    def test_deeply_nested_json_warns(self, tmp_path, capsys):
        """Test that nesting too deep for the decoder is treated as corrupt."""
        path = tmp_path / "expenses.json"
        path.write_text("[" * 100000 + "]" * 100000)
        assert len(load_expenses(path)) == 0
        assert CORRUPT_STORE_WARNING in capsys.readouterr().err

    def test_non_array_warns(self, tmp_path, capsys):
        """Test that a JSON object at top level is rejected."""
        path = tmp_path / "expenses.json"
        path.write_text('{"id": 1, "description": "Coffee", "amount": 3.5}')
        assert len(load_expenses(path)) == 0
        assert CORRUPT_STORE_WARNING in capsys.readouterr().err

    def test_invalid_entries_warn(self, tmp_path, capsys):
        """Test that array entries missing required keys are rejected."""
        path = tmp_path / "expenses.json"
        path.write_text('[{"id": 1, "description": "Coffee"}]')
        assert len(load_expenses(path)) == 0
        assert CORRUPT_STORE_WARNING in capsys.readouterr().err

    def test_corrupt_file_is_left_on_disk(self, tmp_path):
        """Test that loading never rewrites the file."""
        path = tmp_path / "expenses.json"
        path.write_text("not json")
        load_expenses(path)
        assert path.read_text() == "not json"

    def test_empty_array(self, tmp_path):
        path = tmp_path / "expenses.json"
        path.write_text("[]")
        assert len(load_expenses(path)) == 0

    def test_directory_gives_empty_list(self, tmp_path):
        """Test that a path that cannot be opened as a file is treated as missing."""
        assert len(load_expenses(tmp_path)) == 0


class TestSaveExpenses:
    """Tests for save_expenses."""

    def test_round_trip(self, tmp_path, sample_expenses):
        """Test that save followed by load yields an equal list."""
        path = tmp_path / "expenses.json"
        save_expenses(path, sample_expenses)
        assert load_expenses(path) == sample_expenses

    def test_writes_pretty_printed_array(self, tmp_path, sample_expenses):
        path = tmp_path / "expenses.json"
        save_expenses(path, sample_expenses)
        text = path.read_text()
        assert text.startswith("[\n    {")
        assert json.loads(text)[0] == {
            "id": 1,
            "date": "2024-12-01",
            "description": "Coffee",
            "amount": 3.5,
        }

    def test_custom_indent(self, tmp_path, sample_expenses):
        path = tmp_path / "expenses.json"
        save_expenses(path, sample_expenses, indent=2)
        assert path.read_text().startswith("[\n  {")

    def test_truncates_existing_content(self, tmp_path):
        """Test that a shorter list fully replaces a longer file."""
        path = tmp_path / "expenses.json"
        path.write_text("x" * 1000)
        save_expenses(path, ExpenseList())
        assert path.read_text() == "[]"

    def test_keeps_non_ascii_text(self, tmp_path):
        path = tmp_path / "expenses.json"
        expenses = ExpenseList()
        expenses.add("Kaffe på café", 35.0)
        save_expenses(path, expenses)
        assert "Kaffe på café" in path.read_text(encoding="utf-8")
        assert load_expenses(path) == expenses

    def test_write_failure_raises_storage_error(self, tmp_path, sample_expenses):
        """Test that an unwritable path is reported as StorageError."""
        with pytest.raises(StorageError):
            save_expenses(tmp_path, sample_expenses)


class TestJsonFileExpenseStorage:
    """Tests for the JSON file backend."""

    def test_load_and_save(self, tmp_path, sample_expenses):
        storage = JsonFileExpenseStorage(tmp_path / "expenses.json")
        assert len(storage.load()) == 0
        storage.save(sample_expenses)
        assert storage.load() == sample_expenses


class TestInMemoryExpenseStorage:
    """Tests for the in-memory backend."""

    def test_save_copies(self, sample_expenses):
        """Test that later mutation does not change what was saved."""
        storage = InMemoryExpenseStorage()
        storage.save(sample_expenses)
        sample_expenses.remove(1)
        assert storage.load().ids == [1, 3, 4]
        assert storage.save_count == 1

    def test_load_returns_copy(self, sample_expenses):
        storage = InMemoryExpenseStorage(sample_expenses)
        loaded = storage.load()
        loaded.add("Tea", 1.0)
        assert len(storage.load()) == 3
