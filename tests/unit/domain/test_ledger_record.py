"""Unit tests for LedgerRecord domain entity"""

import pytest
from decimal import Decimal
from pydantic import ValidationError

from src.domain.ledger_record import LedgerRecord, PaymentStatus
from src.domain.partition import PartitionKey


class TestLedgerRecordCreation:
    """Test LedgerRecord parsing"""

    def test_create_from_stored_camel_case(self):
        """Test a stored partition object maps onto attributes"""
        # Arrange
        stored = {
            "id": "rec-1",
            "code": "PAY-001",
            "date": "2024-01-05",
            "counterpartyName": "Ruby Traders",
            "currency": "usd",
            "baseAmount": "1000",
            "paidAmount": 500,
            "exchangeRate": "300",
            "dueDate": "2024-02-01",
            "status": "Partial",
            "sourceModule": "outstanding",
            "sourceTab": "Payment Received",
        }

        # Act
        record = LedgerRecord.model_validate(stored)

        # Assert
        assert record.id == "rec-1"
        assert record.counterparty_name == "Ruby Traders"
        assert record.currency == "USD"
        assert record.base_amount == Decimal("1000")
        assert record.paid_amount == Decimal("500")
        assert record.status == PaymentStatus.PARTIAL
        assert record.owner_key() == PartitionKey(module_id="outstanding", tab_id="Payment Received")

    def test_legacy_field_names_are_accepted(self):
        """Test records written by older views (invoiceAmount, customerName)"""
        record = LedgerRecord.model_validate(
            {"customerName": "Blue Gems", "invoiceAmount": "250", "currency": "LKR"}
        )

        assert record.counterparty_name == "Blue Gems"
        assert record.base_amount == Decimal("250")

    def test_vendor_name_and_amount_aliases(self):
        record = LedgerRecord.model_validate({"vendorName": "Supplier", "amount": "12"})

        assert record.counterparty_name == "Supplier"
        assert record.base_amount == Decimal("12")

    def test_id_is_generated(self):
        first = LedgerRecord()
        second = LedgerRecord()

        assert first.id
        assert first.id != second.id

    def test_non_string_currency_is_rejected(self):
        with pytest.raises(ValidationError):
            LedgerRecord(counterparty_name="A", currency=5)

    def test_blank_due_date_is_missing(self):
        record = LedgerRecord.model_validate({"dueDate": "-", "paymentDate": "  "})

        assert record.due_date is None
        assert record.payment_date is None


class TestLedgerRecordStorage:
    """Test the serialized form"""

    def test_to_storage_uses_canonical_names(self):
        """Test legacy names are rewritten and None values dropped"""
        # Arrange
        record = LedgerRecord.model_validate(
            {"id": "rec-2", "customerName": "Blue Gems", "invoiceAmount": "250", "currency": "LKR"}
        )

        # Act
        stored = record.to_storage()

        # Assert
        assert stored["counterpartyName"] == "Blue Gems"
        assert stored["baseAmount"] == "250"
        assert "invoiceAmount" not in stored
        assert "customerName" not in stored
        assert "percent" not in stored

    def test_unknown_attributes_survive_round_trip(self):
        record = LedgerRecord.model_validate({"id": "rec-3", "stoneType": "Spinel", "carats": 2.5})

        stored = record.to_storage()
        reloaded = LedgerRecord.model_validate(stored)

        assert stored["stoneType"] == "Spinel"
        assert reloaded.model_extra["carats"] == 2.5


class TestLedgerRecordRules:
    """Test field helpers"""

    def test_missing_required_fields(self):
        record = LedgerRecord(counterparty_name="  ")

        assert record.missing_required_fields() == ["counterparty_name", "base_amount", "currency"]

    def test_complete_record_has_no_missing_fields(self):
        record = LedgerRecord(counterparty_name="A", base_amount=Decimal("0"), currency="LKR")

        assert record.missing_required_fields() == []

    def test_canonical_field_name(self):
        assert LedgerRecord.canonical_field_name("invoiceAmount") == "base_amount"
        assert LedgerRecord.canonical_field_name("counterpartyName") == "counterparty_name"
        assert LedgerRecord.canonical_field_name("due_date") == "due_date"
        assert LedgerRecord.canonical_field_name("stoneType") == "stoneType"

    def test_untagged_record_has_no_owner(self):
        assert LedgerRecord(source_module="kenya").owner_key() is None
