from typing import Literal, Optional

from fastapi import APIRouter, Query

from models.schemas import RecurrenceExceptionCreate, TransactionCreate, TransactionUpdate
from services import recurrence_exception_service, transaction_service

router = APIRouter()


# -------------------------
# TRANSACTIONS
# -------------------------

@router.get("/transactions")
def list_transactions(
    type: Optional[Literal["income", "expense"]] = None,
    expense_type: Optional[Literal["fixed", "variable", "subscription"]] = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    transactions = transaction_service.get_all_transactions(
        type=type, expense_type=expense_type, limit=limit, offset=offset
    )
    return {
        "success": True,
        "data": transactions,
        "pagination": {"limit": limit, "offset": offset, "count": len(transactions)},
    }


@router.post("/transactions", status_code=201)
def create_transaction(payload: TransactionCreate):
    return {"success": True, "data": transaction_service.add_transaction(payload)}


@router.get("/transactions/{transaction_id}")
def get_transaction(transaction_id: int):
    return {"success": True, "data": transaction_service.get_transaction(transaction_id)}


@router.put("/transactions/{transaction_id}")
def update_transaction(transaction_id: int, payload: TransactionUpdate):
    transaction = transaction_service.update_transaction(
        transaction_id, payload.model_dump(exclude_unset=True)
    )
    return {"success": True, "data": transaction}


@router.delete("/transactions/{transaction_id}")
def delete_transaction(transaction_id: int):
    transaction_service.delete_transaction(transaction_id)
    return {"success": True, "message": "Transaction deleted"}


# -------------------------
# RECURRENCE EXCEPTIONS
# -------------------------

@router.get("/transactions/{transaction_id}/exceptions")
def list_exceptions(transaction_id: int):
    return {
        "success": True,
        "data": recurrence_exception_service.get_exceptions(transaction_id),
    }


@router.post("/transactions/{transaction_id}/exceptions", status_code=201)
def create_exception(transaction_id: int, payload: RecurrenceExceptionCreate):
    exception = recurrence_exception_service.save_exception(transaction_id, payload)
    return {"success": True, "data": exception}


@router.delete("/exceptions/{exception_id}")
def delete_exception(exception_id: int):
    recurrence_exception_service.remove_exception(exception_id)
    return {"success": True, "message": "Recurrence exception deleted"}
