import logging
from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from gym_admin.core.config import settings
from gym_admin.models.profile import Profile
from gym_admin.models.trash import DeletedItemTrash
from gym_admin.repositories.finance_repository import FinanceRepository
from gym_admin.services.client_service import get_client_or_404

logger = logging.getLogger(__name__)


def _round_money(value: float) -> float:
    return round(float(value or 0), 2)


def _client_snapshot(repo: FinanceRepository, profile: Profile) -> dict:
    payments = repo.list_client_payments(profile.id)
    plans = repo.list_client_plans(profile.id)

    pending = [p for p in payments if p.status in ("pending", "frozen")]
    open_plans = [p for p in plans if p.status in ("active", "frozen")]

    return {
        "profile_id": profile.id,
        "username": profile.username,
        "full_name": profile.full_name,
        "email": profile.email,
        "phone": profile.phone,
        "previous_status": profile.enrollment_status,
        "monthly_fee": profile.monthly_fee,
        "pending_payments": len(pending),
        "pending_amount": _round_money(sum(p.amount for p in pending)),
        "active_plans": len(open_plans),
    }


# =========================
# SOFT DELETE
# =========================
def soft_delete_client(
    repo: FinanceRepository,
    client_id: int,
    deleted_by: Optional[int] = None,
) -> dict:
    profile = get_client_or_404(repo, client_id)

    if profile.enrollment_status == "cancelled":
        raise HTTPException(status_code=400, detail="Client already cancelled")

    now = datetime.utcnow()
    completed_steps: list[str] = []

    try:
        trash_item = repo.add_trash_item(
            DeletedItemTrash(
                original_table="profiles",
                original_id=profile.id,
                item_data=_client_snapshot(repo, profile),
                deleted_by=deleted_by,
                deleted_at=now,
                auto_purge_at=now + timedelta(days=settings.TRASH_RETENTION_DAYS),
            )
        )
        repo.commit()
        completed_steps.append("archived")

        payments_cancelled = repo.update_client_payments_status(
            client_id, ["pending", "frozen"], "cancelled"
        )
        repo.commit()
        completed_steps.append("payments_cancelled")

        plans_cancelled = repo.update_client_plans_status(
            client_id, ["active", "frozen"], "cancelled"
        )
        repo.commit()
        completed_steps.append("plans_cancelled")

        profile = get_client_or_404(repo, client_id)
        profile.enrollment_status = "cancelled"
        repo.commit()
        completed_steps.append("profile_cancelled")

        links_deactivated = repo.deactivate_instructor_links(client_id)
        repo.commit()
        completed_steps.append("instructor_links_deactivated")
    except SQLAlchemyError:
        repo.rollback()
        logger.exception(
            "Soft delete of client %s stopped after steps %s",
            client_id,
            completed_steps,
        )
        raise HTTPException(status_code=500, detail="Failed to delete client")

    logger.info("Client %s cancelled and archived as trash item %s", client_id, trash_item.id)

    return {
        "trash_id": trash_item.id,
        "payments_cancelled": payments_cancelled,
        "plans_cancelled": plans_cancelled,
        "instructor_links_deactivated": links_deactivated,
    }


# =========================
# FREEZE / UNFREEZE
# =========================
def freeze_enrollment(
    repo: FinanceRepository,
    client_id: int,
    end_date: Optional[date],
    start_date: Optional[date] = None,
) -> int:
    profile = get_client_or_404(repo, client_id)

    if not end_date:
        raise HTTPException(status_code=400, detail="Freeze end date is required")

    start_date = start_date or date.today()
    if end_date < start_date:
        raise HTTPException(
            status_code=400,
            detail="Freeze end date must be on or after the start date"
        )

    if profile.enrollment_status != "active":
        raise HTTPException(
            status_code=400,
            detail="Only active enrollments can be frozen"
        )

    profile.enrollment_status = "frozen"
    profile.freeze_start_date = start_date
    profile.freeze_end_date = end_date

    frozen = repo.update_client_payments_status(client_id, ["pending"], "frozen")
    repo.commit()

    return frozen


def unfreeze_enrollment(repo: FinanceRepository, client_id: int) -> int:
    profile = get_client_or_404(repo, client_id)

    if profile.enrollment_status != "frozen":
        raise HTTPException(
            status_code=400,
            detail="Enrollment is not frozen"
        )

    profile.enrollment_status = "active"
    profile.freeze_start_date = None
    profile.freeze_end_date = None

    resumed = repo.update_client_payments_status(client_id, ["frozen"], "pending")
    repo.commit()

    return resumed
