"""
Tests for Expense Tracker

Test strategy:
1. Unit tests for individual components (models, parser, validation)
2. Handler tests against an in-memory ExpenseList
3. End-to-end runs against a store file in tmp_path
"""

import pytest
from datetime import date
from uuid import uuid4

from pydantic import ValidationError

from expense_tracker.models.expense import (
    CommandResult,
    ErrorKind,
    Expense,
    ExpenseList,
    format_amount,
    today_iso,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestExpenseModel:
    """Tests for the Expense model."""

    def test_expense_creation(self):
        """Test Expense model creation."""
        expense = Expense(id=1, date="2024-12-01", description="Coffee", amount=3.5)
        assert expense.id == 1
        assert expense.description == "Coffee"
        assert expense.amount == 3.5

    def test_expense_defaults_to_today(self):
        """Test that date defaults to the current local date."""
        expense = Expense(id=1, description="Coffee", amount=3.5)
        assert expense.date == today_iso()

    def test_expense_rejects_non_positive_id(self):
        """Test that ids start at 1."""
        with pytest.raises(ValidationError):
            Expense(id=0, date="2024-12-01", description="Coffee", amount=3.5)

    def test_expense_rejects_bad_date(self):
        """Test that the date must be YYYY-MM-DD."""
        with pytest.raises(ValidationError):
            Expense(id=1, date="01/12/2024", description="Coffee", amount=3.5)

    def test_expense_is_immutable(self):
        """Test that an expense cannot be edited after creation."""
        expense = Expense(id=1, date="2024-12-01", description="Coffee", amount=3.5)
        with pytest.raises(ValidationError):
            expense.date = "2025-01-01"

    def test_integer_amount_is_accepted(self):
        """Test that a whole-number amount in the store loads as float."""
        expense = Expense.model_validate(
            {"id": 1, "date": "2024-12-01", "description": "Rent", "amount": 10}
        )
        assert expense.amount == 10.0
        assert isinstance(expense.amount, float)

    def test_dump_key_order(self):
        """Test that serialized keys follow the store file layout."""
        expense = Expense(id=1, date="2024-12-01", description="Coffee", amount=3.5)
        assert list(expense.model_dump()) == ["id", "date", "description", "amount"]


class TestExpenseList:
    """Tests for the ExpenseList store."""

    @pytest.fixture
    def expenses(self):
        return ExpenseList.model_validate([
            {"id": 1, "date": "2024-12-01", "description": "Coffee", "amount": 10},
            {"id": 2, "date": "2024-12-02", "description": "Bread", "amount": 5.5},
            {"id": 4, "date": "2024-12-03", "description": "Milk", "amount": 2.25},
        ])

    def test_empty_list_next_id_is_one(self):
        """Test that the first expense gets id 1."""
        assert ExpenseList().next_id() == 1

    def test_next_id_follows_highest(self, expenses):
        """Test that the next id is one past the highest id."""
        assert expenses.next_id() == 5

    def test_next_id_ignores_order(self):
        """Test that an out-of-order list still yields a unique id."""
        expenses = ExpenseList.model_validate([
            {"id": 7, "date": "2024-12-01", "description": "A", "amount": 1},
            {"id": 3, "date": "2024-12-01", "description": "B", "amount": 1},
        ])
        assert expenses.next_id() == 8

    def test_add_appends(self, expenses):
        """Test that add appends with the given date."""
        expense = expenses.add("Tea", 4.0, on=date(2024, 12, 24))
        assert expense.id == 5
        assert expense.date == "2024-12-24"
        assert expenses[-1] == expense
        assert len(expenses) == 4

    def test_remove_keeps_others_in_order(self, expenses):
        """Test that removing one expense leaves the rest untouched."""
        removed = expenses.remove(2)
        assert removed.description == "Bread"
        assert expenses.ids == [1, 4]
        assert expenses[0].description == "Coffee"
        assert expenses[1].description == "Milk"

    def test_remove_missing_returns_none(self, expenses):
        """Test that removing an unknown id changes nothing."""
        before = expenses.model_copy(deep=True)
        assert expenses.remove(3) is None
        assert expenses == before

    def test_ids_are_not_renumbered(self, expenses):
        """Test that deletion leaves a gap and add continues past it."""
        expenses.remove(4)
        assert expenses.add("Tea", 1.0).id == 3

    def test_total(self, expenses):
        """Test that total sums every amount."""
        assert expenses.total() == pytest.approx(17.75)

    def test_total_of_empty_list(self):
        assert ExpenseList().total() == 0.0

    def test_rejects_non_list(self):
        """Test that the store must be an array."""
        with pytest.raises(ValidationError):
            ExpenseList.model_validate({"id": 1})


class TestFormatAmount:
    """Tests for amount display."""

    def test_drops_trailing_zeros(self):
        assert format_amount(15.5) == "15.5kr"
        assert format_amount(100.0) == "100kr"
        assert format_amount(0.0) == "0kr"

    def test_keeps_stored_precision(self):
        """Test that amounts with more than two decimals are not truncated."""
        assert format_amount(3.14159) == "3.14159kr"
        assert format_amount(2.125) == "2.125kr"

    def test_hides_float_noise(self):
        assert format_amount(0.1 + 0.2) == "0.3kr"
        assert format_amount(1.23456789) == "1.234568kr"

    def test_custom_unit(self):
        assert format_amount(2.5, "EUR") == "2.5EUR"

    def test_negative_zero(self):
        assert format_amount(-0.0000001) == "0kr"


class TestCommandResult:
    """Tests for the CommandResult model."""

    def test_defaults(self):
        result = CommandResult(command="list")
        assert result.success is True
        assert result.mutated is False
        assert result.output == []
        assert result.error_kind is None

    def test_failure(self):
        result = CommandResult.failure("delete", ErrorKind.NOT_FOUND, "No expense found with ID 9", 9)
        assert result.success is False
        assert result.error_kind == ErrorKind.NOT_FOUND
        assert result.expense_id == 9


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            description="Expense 1 added",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        correlation_id = uuid4()
        event = AuditEventBuilder.expense_added(
            expense_id=3,
            amount=12.5,
            correlation_id=correlation_id,
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["entity_id"] == 3
        assert log_dict["correlation_id"] == str(correlation_id)
        assert log_dict["details"]["amount"] == 12.5

    def test_store_reset_is_a_warning(self):
        """Test AuditEventBuilder.store_reset."""
        event = AuditEventBuilder.store_reset("expenses.json", "invalid JSON")
        assert event.event_type == AuditEventType.STORE_RESET
        assert event.severity == AuditSeverity.WARNING
        assert event.error_message == "invalid JSON"

    def test_command_rejected_without_command(self):
        """Test that a missing command is coded as a usage error."""
        event = AuditEventBuilder.command_rejected(None)
        assert event.error_code == "usage"
        assert AuditEventBuilder.command_rejected("export").error_code == "unknown_command"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
