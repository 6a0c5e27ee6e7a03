from fastapi import APIRouter

from models.schemas import BankAccountCreate, BankAccountUpdate
from services import account_service
from services.projection_service import total_balance

router = APIRouter()


@router.get("/accounts")
def list_accounts():
    accounts = account_service.get_all_accounts()
    return {
        "success": True,
        "data": accounts,
        "summary": {
            "total_balance": total_balance(accounts),
            "total_accounts": len(accounts),
        },
    }


@router.post("/accounts", status_code=201)
def create_account(payload: BankAccountCreate):
    return {"success": True, "data": account_service.add_account(payload)}


@router.put("/accounts/{account_id}")
def update_account(account_id: int, payload: BankAccountUpdate):
    account = account_service.update_account(account_id, payload.model_dump(exclude_unset=True))
    return {"success": True, "data": account}


@router.delete("/accounts/{account_id}")
def delete_account(account_id: int):
    account_service.delete_account(account_id)
    return {"success": True, "message": "Account deleted"}
