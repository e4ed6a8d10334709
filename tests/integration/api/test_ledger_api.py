"""Integration tests for Ledger API endpoints"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from config import ApplicationConfig

KENYA_URL = f"{ApplicationConfig.API_PREFIX}/ledger/kenya/Payments"
RECEIVED_URL = f"{ApplicationConfig.API_PREFIX}/ledger/outstanding/Payment%20Received"
MOTHER_URL = f"{ApplicationConfig.API_PREFIX}/ledger/outstanding/All%20Payments"


async def create(client: AsyncClient, url: str, **fields) -> dict:
    fields.setdefault("counterpartyName", "Ruby Traders")
    fields.setdefault("baseAmount", "1000")
    response = await client.post(f"{url}/records", json={"fields": fields})
    assert response.status_code == 201, response.text
    return response.json()


class TestLedgerRecordsAPI:
    """Integration test suite for record endpoints"""

    @pytest.mark.asyncio
    async def test_create_record_returns_derived_fields(self, client: AsyncClient):
        """Test POST /records computes dependent fields and returns camelCase keys"""
        # Act
        response = await client.post(
            f"{KENYA_URL}/records",
            json={
                "fields": {
                    "date": "2024-01-15",
                    "counterpartyName": "Ruby Traders",
                    "currency": "USD",
                    "baseAmount": "1000",
                    "paidAmount": "500",
                    "exchangeRate": "300",
                    "percent": "10",
                    "stoneType": "Sapphire",
                }
            },
        )

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["code"].startswith("REC-")
        assert Decimal(data["commission"]) == Decimal("100")
        assert Decimal(data["finalAmount"]) == Decimal("1100")
        assert Decimal(data["outstandingAmount"]) == Decimal("500")
        assert Decimal(data["convertedAmount"]) == Decimal("150000")
        assert data["status"] == "Partial"
        assert data["stoneType"] == "Sapphire"
        assert "sourceModule" not in data

    @pytest.mark.asyncio
    async def test_create_base_currency_record_has_no_conversion(self, client: AsyncClient):
        data = await create(client, KENYA_URL, currency="LKR", paidAmount="1000", exchangeRate="300")

        assert data["status"] == "Paid"
        assert "exchangeRate" not in data
        assert "convertedAmount" not in data

    @pytest.mark.asyncio
    async def test_create_missing_fields_returns_422(self, client: AsyncClient):
        # Act
        response = await client.post(f"{KENYA_URL}/records", json={"fields": {"notes": "draft"}})

        # Assert
        assert response.status_code == 422
        data = response.json()
        assert data["error"]["code"] == "VALIDATION_ERROR"
        assert "counterparty_name" in data["error"]["message"]

    @pytest.mark.asyncio
    async def test_update_record(self, client: AsyncClient):
        """Test PATCH recomputes status and keeps the id"""
        # Arrange
        created = await create(client, KENYA_URL, dueDate="2024-01-10")
        assert created["status"] == "Overdue"

        # Act
        response = await client.patch(
            f"{KENYA_URL}/records/{created['id']}",
            json={"changes": {"paidAmount": "1000", "status": "Pending"}},
        )

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["status"] == "Paid"
        assert Decimal(data["outstandingAmount"]) == Decimal("0")

    @pytest.mark.asyncio
    async def test_update_unknown_record_returns_404(self, client: AsyncClient):
        response = await client.patch(
            f"{KENYA_URL}/records/does-not-exist", json={"changes": {"notes": "x"}}
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "RECORD_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_with_empty_changes_is_rejected(self, client: AsyncClient):
        created = await create(client, KENYA_URL)

        response = await client.patch(f"{KENYA_URL}/records/{created['id']}", json={"changes": {}})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_delete_record(self, client: AsyncClient):
        # Arrange
        created = await create(client, KENYA_URL)

        # Act
        response = await client.delete(f"{KENYA_URL}/records/{created['id']}")
        again = await client.delete(f"{KENYA_URL}/records/{created['id']}")
        listed = await client.get(f"{KENYA_URL}/records")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"record_id": created["id"], "deleted": True}
        assert again.json()["deleted"] is False
        assert listed.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_list_records_with_search_and_filters(self, client: AsyncClient):
        # Arrange
        await create(client, KENYA_URL, date="2024-01-05", counterpartyName="Nairobi Gems", currency="KES")
        await create(client, KENYA_URL, date="2024-01-12", counterpartyName="Ruby Traders", currency="USD")
        await create(client, KENYA_URL, date="2024-01-08", counterpartyName="Blue Ruby", currency="USD",
                     paidAmount="1000")

        # Act
        all_records = await client.get(f"{KENYA_URL}/records")
        searched = await client.get(f"{KENYA_URL}/records", params={"search": "ruby"})
        filtered = await client.get(
            f"{KENYA_URL}/records",
            params={"currency": "USD", "status": "Pending", "date_from": "2024-01-01"},
        )
        everything = await client.get(f"{KENYA_URL}/records", params={"currency": "All"})

        # Assert
        assert [r["counterpartyName"] for r in all_records.json()["records"]] == [
            "Ruby Traders", "Blue Ruby", "Nairobi Gems"
        ]
        assert searched.json()["total"] == 2
        assert [r["counterpartyName"] for r in filtered.json()["records"]] == ["Ruby Traders"]
        assert everything.json()["total"] == 3


class TestMotherViewAPI:
    """Integration test suite for federated views"""

    @pytest.mark.asyncio
    async def test_mother_view_merges_and_routes(self, client: AsyncClient):
        """Test records from sibling views appear in the mother view and edits go back"""
        # Arrange
        kenya = await create(client, KENYA_URL, date="2024-01-03", counterpartyName="Nairobi Gems")
        received = await create(client, RECEIVED_URL, date="2024-01-04", counterpartyName="Ruby Traders")

        # Act
        merged = await client.get(f"{MOTHER_URL}/records")
        patched = await client.patch(
            f"{MOTHER_URL}/records/{kenya['id']}", json={"changes": {"notes": "called"}}
        )
        kenya_view = await client.get(f"{KENYA_URL}/records")

        # Assert
        records = merged.json()["records"]
        assert [r["id"] for r in records] == [received["id"], kenya["id"]]
        assert records[1]["sourceModule"] == "kenya"
        assert records[1]["sourceTab"] == "Payments"
        assert patched.status_code == 200
        assert kenya_view.json()["records"][0]["notes"] == "called"

    @pytest.mark.asyncio
    async def test_create_and_delete_from_mother_view(self, client: AsyncClient):
        # Act
        created = await create(
            client, MOTHER_URL, sourceModule="outstanding", sourceTab="Payment Received"
        )
        in_child = await client.get(f"{RECEIVED_URL}/records")
        deleted = await client.delete(f"{MOTHER_URL}/records/{created['id']}")
        after = await client.get(f"{RECEIVED_URL}/records")

        # Assert
        assert created["sourceTab"] == "Payment Received"
        assert [r["id"] for r in in_child.json()["records"]] == [created["id"]]
        assert deleted.json()["deleted"] is True
        assert after.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_mother_view_rejects_partition_it_does_not_read(self, client: AsyncClient):
        response = await client.post(
            f"{MOTHER_URL}/records",
            json={"fields": {"counterpartyName": "A", "baseAmount": "1",
                             "sourceModule": "nowhere", "sourceTab": "X"}},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_plain_view_ignores_ownership_tags(self, client: AsyncClient):
        created = await create(client, RECEIVED_URL, sourceModule="kenya", sourceTab="Payments")

        merged = await client.get(f"{MOTHER_URL}/records")

        assert "sourceModule" not in created
        assert merged.json()["records"][0]["sourceTab"] == "Payment Received"


class TestSummaryAndAlertsAPI:
    """Integration test suite for statistics endpoints"""

    @pytest.mark.asyncio
    async def test_summary(self, client: AsyncClient):
        # Arrange
        await create(client, KENYA_URL, date="2024-01-05", currency="LKR", paidAmount="1000")
        await create(client, KENYA_URL, date="2023-12-05", currency="USD", exchangeRate="300")

        # Act
        response = await client.get(f"{KENYA_URL}/summary")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["record_count"] == 2
        assert data["paid_count"] == 1
        assert data["pending_count"] == 1
        assert data["this_month_count"] == 1
        assert data["foreign_currency_count"] == 1
        assert Decimal(data["total_in_base_currency"]) == Decimal("301000")

    @pytest.mark.asyncio
    async def test_alerts(self, client: AsyncClient):
        # Arrange
        overdue = await create(client, KENYA_URL, dueDate="2024-01-15")
        await create(client, KENYA_URL, dueDate="2024-03-01")

        # Act
        response = await client.get(f"{KENYA_URL}/alerts")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["scanned_records"] == 2
        assert data["alerts"][0]["record_id"] == overdue["id"]
        assert data["alerts"][0]["alert_type"] == "overdue"
