import logging
from datetime import date, datetime
from typing import Optional

from fastapi import HTTPException

from gym_admin.models.payment import Payment
from gym_admin.repositories.finance_repository import FinanceRepository
from gym_admin.services.client_service import get_client_or_404
from gym_admin.services.payment_plan_service import (
    ALLOWED_METHODS,
    generate_receipt_number,
)

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Mensalidade"


def _round_money(value: float) -> float:
    return round(float(value or 0), 2)


# =========================
# STANDALONE PAYMENT
# =========================
def record_standalone_payment(
    repo: FinanceRepository,
    client_id: int,
    amount: float,
    method: str,
    description: Optional[str] = DEFAULT_DESCRIPTION,
    now: Optional[datetime] = None,
) -> Payment:
    client = get_client_or_404(repo, client_id)

    amount = _round_money(amount)
    if amount <= 0:
        raise HTTPException(status_code=400, detail="Invalid payment amount")

    method = (method or "").strip().lower()
    if method not in ALLOWED_METHODS:
        raise HTTPException(
            status_code=400,
            detail="Invalid payment method. Use cash, pix, or card",
        )

    description = (description or "").strip() or DEFAULT_DESCRIPTION
    now = now or datetime.utcnow()

    if repo.find_paid_payment_on_day(client.id, description, amount, now.date()):
        raise HTTPException(
            status_code=409,
            detail="This payment was already recorded today"
        )

    payment = repo.add_payment(
        Payment(
            client_id=client.id,
            plan_id=None,
            amount=amount,
            description=description,
            status="paid",
            paid_at=now,
            payment_method=method,
            receipt_number=generate_receipt_number(now),
            due_date=now.date(),
            installment_number=1,
            total_installments=1,
        )
    )
    repo.commit()
    repo.refresh(payment)

    logger.info(
        "Recorded standalone payment %s for client %s: %s via %s",
        payment.id,
        client.id,
        amount,
        method,
    )

    return payment


# =========================
# DEFAULTERS
# =========================
def list_defaulters(
    repo: FinanceRepository,
    today: Optional[date] = None,
) -> list[dict]:
    today = today or date.today()

    return [
        {
            "id": payment.id,
            "client_id": payment.client_id,
            "amount": payment.amount,
            "due_date": payment.due_date,
            "description": payment.description,
            "days_overdue": (today - payment.due_date).days,
            "client": {
                "full_name": (
                    payment.client.full_name or payment.client.username
                    if payment.client else "Unknown"
                ),
                "username": payment.client.username if payment.client else "",
                "phone": payment.client.phone if payment.client else None,
                "email": payment.client.email if payment.client else None,
            },
        }
        for payment in repo.list_overdue_payments(today)
    ]
