import logging
import secrets
import string
from datetime import date, datetime
from typing import Optional

from dateutil.relativedelta import relativedelta
from fastapi import HTTPException

from gym_admin.models.payment import Payment
from gym_admin.models.payment_plan import PaymentPlan
from gym_admin.repositories.finance_repository import FinanceRepository
from gym_admin.schemas.payment_plan import PaymentPlanCreate
from gym_admin.services.client_service import get_client_or_404

logger = logging.getLogger(__name__)

ALLOWED_METHODS = {"cash", "pix", "card"}
MAX_INSTALLMENTS = 12

RECEIPT_ALPHABET = string.ascii_uppercase + string.digits


def _round_money(value: float) -> float:
    return round(float(value or 0), 2)


def generate_receipt_number(now: Optional[datetime] = None) -> str:
    now = now or datetime.utcnow()
    suffix = "".join(secrets.choice(RECEIPT_ALPHABET) for _ in range(4))
    return f"REC{now.strftime('%y%m%d')}{suffix}"


def installment_due_dates(start_date: date, installments: int) -> list[date]:
    return [start_date + relativedelta(months=i) for i in range(installments)]


# =========================
# CREATE CARNÊ
# =========================
def create_payment_plan(
    repo: FinanceRepository,
    data: PaymentPlanCreate,
    created_by: Optional[int] = None,
) -> PaymentPlan:
    client = get_client_or_404(repo, data.client_id)

    if client.enrollment_status == "cancelled":
        raise HTTPException(
            status_code=400,
            detail="Cannot create a payment plan for a cancelled client"
        )

    if data.total_amount <= 0:
        raise HTTPException(status_code=400, detail="Invalid plan amount")

    if not 1 <= data.installments <= MAX_INSTALLMENTS:
        raise HTTPException(
            status_code=400,
            detail=f"Installments must be between 1 and {MAX_INSTALLMENTS}"
        )

    discount = data.discount or 0
    if not 0 <= discount <= 100:
        raise HTTPException(status_code=400, detail="Discount must be between 0 and 100")

    discounted_total = _round_money(data.total_amount * (1 - discount / 100))
    installment_amount = _round_money(discounted_total / data.installments)
    start_date = data.start_date or date.today()
    description = (data.description or "").strip()

    plan = repo.add_plan(
        PaymentPlan(
            client_id=client.id,
            created_by=created_by,
            total_amount=discounted_total,
            installments=data.installments,
            installment_amount=installment_amount,
            discount_percentage=discount,
            status="active",
            start_date=start_date,
            description=description or f"Carnê {data.installments}x",
        )
    )
    repo.commit()
    repo.refresh(plan)

    # Installments are written after the plan is committed
    repo.add_payments(
        Payment(
            client_id=client.id,
            plan_id=plan.id,
            amount=installment_amount,
            due_date=due_date,
            status="pending",
            payment_method="pending",
            installment_number=number,
            total_installments=data.installments,
            description=f"Parcela {number}/{data.installments} - {description or 'Carnê'}",
        )
        for number, due_date in enumerate(
            installment_due_dates(start_date, data.installments), start=1
        )
    )
    repo.commit()
    repo.refresh(plan)

    logger.info(
        "Created plan %s for client %s: %s x %s",
        plan.id,
        client.id,
        data.installments,
        installment_amount,
    )

    return plan


# =========================
# PAY INSTALLMENT
# =========================
def pay_installment(
    repo: FinanceRepository,
    payment_id: int,
    method: str,
) -> dict:
    payment = repo.get_payment(payment_id)
    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")

    method = (method or "").strip().lower()
    if method not in ALLOWED_METHODS:
        raise HTTPException(
            status_code=400,
            detail="Invalid payment method. Use cash, pix, or card",
        )

    if payment.status == "paid":
        raise HTTPException(status_code=400, detail="Installment already paid")

    if payment.status != "pending":
        raise HTTPException(
            status_code=400,
            detail=f"Cannot pay a {payment.status} installment"
        )

    receipt_number = generate_receipt_number()

    payment.status = "paid"
    payment.paid_at = datetime.utcnow()
    payment.payment_method = method
    payment.receipt_number = receipt_number
    repo.commit()

    plan_status = None
    if payment.plan_id:
        plan = repo.get_plan(payment.plan_id)
        if plan and repo.count_plan_payments(plan.id, "pending") == 0:
            plan.status = "completed"
            repo.commit()
        plan_status = plan.status if plan else None

    return {
        "message": "Installment paid successfully",
        "payment_id": payment.id,
        "receipt_number": receipt_number,
        "plan_status": plan_status,
    }


# =========================
# LIST CARNÊS
# =========================
def list_payment_plans(
    repo: FinanceRepository,
    client_id: Optional[int] = None,
) -> list[dict]:
    result = []

    for plan in repo.list_plans(client_id):
        payments = repo.list_plan_payments(plan.id)
        result.append({
            "plan": plan,
            "payments": payments,
            "paid_count": len([p for p in payments if p.status == "paid"]),
            "total_count": plan.installments,
        })

    return result
