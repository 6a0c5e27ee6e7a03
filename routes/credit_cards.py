from fastapi import APIRouter, Response

from models.schemas import CreditCardCreate, CreditCardUpdate, InvoiceUpsert
from services import credit_card_service

router = APIRouter(prefix="/credit-cards")


@router.get("")
def list_cards():
    return {"success": True, "data": credit_card_service.get_all_cards()}


@router.post("", status_code=201)
def create_card(payload: CreditCardCreate):
    return {"success": True, "data": credit_card_service.add_card(payload)}


@router.put("/{card_id}")
def update_card(card_id: int, payload: CreditCardUpdate):
    card = credit_card_service.update_card(card_id, payload.model_dump(exclude_unset=True))
    return {"success": True, "data": card}


@router.delete("/{card_id}")
def delete_card(card_id: int):
    credit_card_service.delete_card(card_id)
    return {"success": True, "message": "Credit card deleted"}


# -------------------------
# INVOICES
# -------------------------

@router.get("/{card_id}/invoices")
def list_invoices(card_id: int):
    return {"success": True, "data": credit_card_service.get_card_invoices(card_id)}


@router.post("/{card_id}/invoices")
def save_invoice(card_id: int, payload: InvoiceUpsert, response: Response):
    invoice, created = credit_card_service.save_invoice(card_id, payload.month, payload.value)
    response.status_code = 201 if created else 200
    return {"success": True, "data": invoice, "created": created}


@router.delete("/{card_id}/invoices/{invoice_id}")
def delete_invoice(card_id: int, invoice_id: int):
    credit_card_service.remove_invoice(card_id, invoice_id)
    return {"success": True, "message": "Invoice deleted"}


@router.get("/{card_id}/invoices/{month}/breakdown")
def invoice_breakdown(card_id: int, month: str):
    """Subscriptions already on this month's invoice vs. the next one."""
    breakdown = credit_card_service.get_invoice_breakdown(card_id, month)
    return {
        "success": True,
        "data": {
            "credit_card_id": breakdown.credit_card_id,
            "month": breakdown.month,
            "closing_date": breakdown.closing_date,
            "due_date": breakdown.due_date,
            "invoice_value": breakdown.invoice_value,
            "charged": breakdown.charged,
            "pending": breakdown.pending,
            "charged_total": breakdown.charged_total,
            "pending_total": breakdown.pending_total,
        },
    }
