from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from gym_admin.core.dependencies import get_finance_repository, require_role
from gym_admin.repositories.finance_repository import FinanceRepository
from gym_admin.schemas.payment import PayInstallmentRequest
from gym_admin.schemas.payment_plan import (
    PaymentPlanCreate,
    PaymentPlanDetail,
    PaymentPlanResponse,
)
from gym_admin.services.audit_service import log_action
from gym_admin.services.payment_plan_service import (
    create_payment_plan,
    list_payment_plans,
    pay_installment,
)

router = APIRouter(prefix="/payment-plans", tags=["Payment Plans"])


@router.post("", response_model=PaymentPlanResponse, status_code=status.HTTP_201_CREATED)
def create_plan(
    payload: PaymentPlanCreate,
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    plan = create_payment_plan(repo, payload, created_by=user.id)

    log_action(
        db=repo.db,
        user_id=user.id,
        action="CREATE_PAYMENT_PLAN",
        entity_type="PaymentPlan",
        entity_id=plan.id,
        details=(
            f"Client: {plan.client_id} | Total: {plan.total_amount} | "
            f"Installments: {plan.installments} x {plan.installment_amount} | "
            f"Discount: {plan.discount_percentage}%"
        )
    )

    return plan


@router.get("", response_model=list[PaymentPlanDetail])
def get_plans(
    client_id: Optional[int] = Query(None),
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    return list_payment_plans(repo, client_id)


@router.post("/payments/{payment_id}/pay")
def pay_plan_installment(
    payment_id: int,
    payload: PayInstallmentRequest,
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    result = pay_installment(repo, payment_id, payload.method)

    log_action(
        db=repo.db,
        user_id=user.id,
        action="PAY_INSTALLMENT",
        entity_type="Payment",
        entity_id=payment_id,
        details=(
            f"Method: {payload.method} | Receipt: {result['receipt_number']} | "
            f"Plan status: {result['plan_status'] or 'N/A'}"
        )
    )

    return result
