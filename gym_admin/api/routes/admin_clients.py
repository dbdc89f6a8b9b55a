from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload

from gym_admin.core.dependencies import get_db, get_finance_repository, require_role
from gym_admin.models.audit_log import AuditLog
from gym_admin.models.user import User
from gym_admin.repositories.finance_repository import FinanceRepository
from gym_admin.schemas.client import (
    ClientHistoryResponse,
    DuplicateSummaryResponse,
    FreezeRequest,
    ReconciliationResponse,
)
from gym_admin.schemas.payment import (
    DefaulterResponse,
    PaymentResponse,
    StandalonePaymentRequest,
)
from gym_admin.services.audit_service import log_action
from gym_admin.services.client_service import get_client_or_404
from gym_admin.services.duplicate_service import summarize_duplicates
from gym_admin.services.enrollment_service import (
    freeze_enrollment,
    soft_delete_client,
    unfreeze_enrollment,
)
from gym_admin.services.history_service import get_client_history
from gym_admin.services.payment_service import (
    list_defaulters,
    record_standalone_payment,
)
from gym_admin.services.reconciliation_service import reconcile_duplicates

router = APIRouter(prefix="/admin", tags=["Admin Clients"])


# ---------------- HISTORY ----------------

@router.get("/clients/{client_id}/history", response_model=ClientHistoryResponse)
def view_client_history(
    client_id: int,
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    return get_client_history(repo, client_id)


# ---------------- DUPLICATES ----------------

@router.get("/clients/{client_id}/duplicates", response_model=DuplicateSummaryResponse)
def view_client_duplicates(
    client_id: int,
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    get_client_or_404(repo, client_id)

    return summarize_duplicates(
        repo.list_client_payments(client_id),
        repo.list_client_plans(client_id),
    ).as_dict()


@router.post(
    "/clients/{client_id}/duplicates/reconcile",
    response_model=ReconciliationResponse,
)
def remove_client_duplicates(
    client_id: int,
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    result = reconcile_duplicates(repo, client_id, user_id=user.id)

    message = (
        f"{result.total_removed} duplicate records removed"
        if result.total_removed
        else "No duplicates found"
    )

    return {"message": message, **result.as_dict()}


# ---------------- ENROLLMENT ----------------

@router.post("/clients/{client_id}/freeze")
def freeze_client(
    client_id: int,
    payload: FreezeRequest,
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    frozen = freeze_enrollment(
        repo,
        client_id,
        end_date=payload.end_date,
        start_date=payload.start_date,
    )

    log_action(
        db=repo.db,
        user_id=user.id,
        action="FREEZE_ENROLLMENT",
        entity_type="Profile",
        entity_id=client_id,
        details=f"Frozen until {payload.end_date.isoformat()} | Payments frozen: {frozen}"
    )

    return {"message": "Enrollment and payments frozen", "payments_frozen": frozen}


@router.post("/clients/{client_id}/unfreeze")
def unfreeze_client(
    client_id: int,
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    resumed = unfreeze_enrollment(repo, client_id)

    log_action(
        db=repo.db,
        user_id=user.id,
        action="UNFREEZE_ENROLLMENT",
        entity_type="Profile",
        entity_id=client_id,
        details=f"Payments resumed: {resumed}"
    )

    return {"message": "Enrollment and payments reactivated", "payments_resumed": resumed}


@router.delete("/clients/{client_id}")
def delete_client(
    client_id: int,
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    result = soft_delete_client(repo, client_id, deleted_by=user.id)

    log_action(
        db=repo.db,
        user_id=user.id,
        action="SOFT_DELETE_CLIENT",
        entity_type="Profile",
        entity_id=client_id,
        details=(
            f"Trash item: {result['trash_id']} | "
            f"Payments cancelled: {result['payments_cancelled']} | "
            f"Plans cancelled: {result['plans_cancelled']}"
        )
    )

    return {"message": "Client moved to trash", **result}


# ---------------- PAYMENTS ----------------

@router.post(
    "/clients/{client_id}/payments",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
)
def receive_standalone_payment(
    client_id: int,
    payload: StandalonePaymentRequest,
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    payment = record_standalone_payment(
        repo,
        client_id,
        amount=payload.amount,
        method=payload.method,
        description=payload.description,
    )

    log_action(
        db=repo.db,
        user_id=user.id,
        action="RECEIVE_PAYMENT",
        entity_type="Payment",
        entity_id=payment.id,
        details=(
            f"Client: {client_id} | Amount: {payment.amount} | "
            f"Method: {payment.payment_method} | Receipt: {payment.receipt_number}"
        )
    )

    return payment


@router.get("/defaulters", response_model=list[DefaulterResponse])
def view_defaulters(
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    return list_defaulters(repo)


# ---------------- AUDIT LOGS ----------------

@router.get("/audit-logs")
def get_audit_logs(
    db: Session = Depends(get_db),
    user=Depends(require_role(["admin"]))
):
    logs = (
        db.query(AuditLog)
        .options(
            joinedload(AuditLog.user).joinedload(User.role)
        )
        .order_by(AuditLog.timestamp.desc())
        .all()
    )

    return [
        {
            "id": log.id,
            "timestamp": log.timestamp,
            "user": {
                "id": log.user_id,
                "name": log.user.name if log.user else "Deleted User",
                "role": log.user.role.name if log.user and log.user.role else None
            },
            "action": log.action,
            "entity": {
                "type": log.entity_type,
                "id": log.entity_id
            },
            "details": log.details
        }
        for log in logs
    ]
