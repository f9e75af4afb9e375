"""
Payment verification and transaction history.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_user, get_transaction_repository, get_verify_transaction_use_case
from app.api.responses import api_response
from app.core.exceptions import NotFoundError
from app.models.db.user import UserDB
from app.repositories.transaction_repository import TransactionRepository
from app.services.payment_reconciliation import VerifyTransactionUseCase

router = APIRouter()


@router.get("/verify-transaction/{reference}")
async def verify_transaction(
    reference: str,
    use_case: VerifyTransactionUseCase = Depends(get_verify_transaction_use_case),  # noqa: B008
):
    """
    Verify a payment and turn it into a booked, assigned shipment.

    See VerifyTransactionUseCase for the status codes of each failure.
    """
    result = await use_case.execute(reference)
    return api_response(result.message, result.data, result.status_code)


@router.get("/transaction/verify/{reference}")
async def get_transaction(
    reference: str,
    transactions: TransactionRepository = Depends(get_transaction_repository),  # noqa: B008
):
    transaction = await transactions.get_by_reference(reference)
    if transaction is None:
        raise NotFoundError("Transaction not found")
    return api_response("Transaction retrieved successfully", transaction.to_summary())


@router.get("/transactions")
async def list_transactions(
    user: UserDB = Depends(get_current_user),  # noqa: B008
    transactions: TransactionRepository = Depends(get_transaction_repository),  # noqa: B008
):
    items = await transactions.list_by_customer_email(user.email)
    if not items:
        raise NotFoundError("No transactions found for this user")
    return api_response("Transactions retrieved successfully", [t.to_dict() for t in items])
