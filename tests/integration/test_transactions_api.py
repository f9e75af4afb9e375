"""
Integration tests for payment verification and transaction history.
"""

from unittest.mock import AsyncMock

import pytest

from app.api.dependencies import get_verify_transaction_use_case
from app.core.exceptions import ConflictError, ExternalServiceError
from app.services.payment_reconciliation import ReconciliationResult, VerifyTransactionUseCase
from tests.utils import assert_error, assert_ok, make_transaction

pytestmark = pytest.mark.integration


@pytest.fixture
def use_case(override) -> AsyncMock:
    return override(get_verify_transaction_use_case, AsyncMock(spec=VerifyTransactionUseCase))


class TestVerifyTransaction:
    def test_renders_result(self, api_client, use_case):
        use_case.execute.return_value = ReconciliationResult(
            message="Payment verified, shipment booked, and assignment successful.",
            data={"shipmentReference": "SHP-1", "bookingStatus": "Booked", "assignStatus": "Assigned"},
        )

        response = api_client.get("/api/verify-transaction/ref_123")

        data = assert_ok(response, 200, "Payment verified, shipment booked, and assignment successful.")
        assert data["shipmentReference"] == "SHP-1"
        use_case.execute.assert_awaited_once_with("ref_123")

    def test_partial_success_status(self, api_client, use_case):
        use_case.execute.return_value = ReconciliationResult(
            message="Shipment booked but assignment failed.", data={"assignStatus": "No rider"}, status_code=500
        )

        response = api_client.get("/api/verify-transaction/ref_123")

        assert response.status_code == 500
        assert response.json()["message"] == "Shipment booked but assignment failed."

    def test_already_processed(self, api_client, use_case):
        use_case.execute.side_effect = ConflictError("Transaction already processed")

        assert_error(api_client.get("/api/verify-transaction/ref_123"), 409, "Transaction already processed")

    def test_gateway_failure(self, api_client, use_case):
        use_case.execute.side_effect = ExternalServiceError("Error verifying transaction: Invalid key", 502)

        assert_error(api_client.get("/api/verify-transaction/ref_123"), 502, "Error verifying transaction: Invalid key")


class TestTransactionLookup:
    def test_returns_summary(self, api_client, transaction_repository):
        transaction_repository.get_by_reference.return_value = make_transaction()

        data = assert_ok(api_client.get("/api/transaction/verify/ref_123"))

        assert data["reference"] == "ref_123"
        assert data["paymentMethod"] == "card"
        assert "orderId" not in data

    def test_unknown_reference(self, api_client, transaction_repository):
        transaction_repository.get_by_reference.return_value = None

        assert_error(api_client.get("/api/transaction/verify/nope"), 404, "Transaction not found")


class TestTransactionHistory:
    def test_lists_by_customer_email(self, api_client, current_user, transaction_repository):
        transaction_repository.list_by_customer_email.return_value = [make_transaction(), make_transaction()]

        data = assert_ok(api_client.get("/api/transactions"))

        assert len(data) == 2
        transaction_repository.list_by_customer_email.assert_awaited_once_with(current_user.email)

    def test_empty_history(self, api_client, current_user, transaction_repository):
        transaction_repository.list_by_customer_email.return_value = []

        assert_error(api_client.get("/api/transactions"), 404, "No transactions found for this user")
