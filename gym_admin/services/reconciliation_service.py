import logging
from dataclasses import asdict, dataclass
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from gym_admin.repositories.finance_repository import FinanceRepository
from gym_admin.services.audit_service import log_action
from gym_admin.services.client_service import get_client_or_404
from gym_admin.services.duplicate_service import summarize_duplicates

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationResult:
    payments_removed: int = 0
    plans_removed: int = 0
    plan_payments_removed: int = 0

    @property
    def total_removed(self) -> int:
        return self.payments_removed + self.plans_removed + self.plan_payments_removed

    def as_dict(self) -> dict:
        data = asdict(self)
        data["total_removed"] = self.total_removed
        return data


def reconcile_duplicates(
    repo: FinanceRepository,
    client_id: int,
    user_id: Optional[int] = None,
) -> ReconciliationResult:
    get_client_or_404(repo, client_id)

    summary = summarize_duplicates(
        repo.list_client_payments(client_id),
        repo.list_client_plans(client_id),
    )
    result = ReconciliationResult()

    if not summary.has_duplicates:
        return result

    payment_ids = summary.payment_ids
    plan_ids = summary.plan_ids

    try:
        if payment_ids:
            result.payments_removed = repo.delete_payments(payment_ids)
            repo.commit()

            log_action(
                db=repo.db,
                user_id=user_id,
                action="REMOVE_DUPLICATE_PAYMENTS",
                entity_type="Profile",
                entity_id=client_id,
                details=f"Removed payments {payment_ids}"
            )

        if plan_ids:
            result.plan_payments_removed = repo.delete_payments_for_plans(plan_ids)
            result.plans_removed = repo.delete_plans(plan_ids)
            repo.commit()

            log_action(
                db=repo.db,
                user_id=user_id,
                action="REMOVE_DUPLICATE_PLANS",
                entity_type="Profile",
                entity_id=client_id,
                details=(
                    f"Removed plans {plan_ids} | "
                    f"Installments removed: {result.plan_payments_removed}"
                )
            )
    except SQLAlchemyError:
        repo.rollback()
        logger.exception(
            "Duplicate reconciliation failed for client %s (payments removed so far: %s)",
            client_id,
            result.payments_removed,
        )
        raise HTTPException(status_code=500, detail="Failed to remove duplicate records")

    logger.info(
        "Reconciled duplicates for client %s: %s",
        client_id,
        result.as_dict(),
    )

    return result
