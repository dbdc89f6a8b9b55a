import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException

from gym_admin.models.trash import DeletedItemTrash
from gym_admin.repositories.finance_repository import FinanceRepository

logger = logging.getLogger(__name__)

RESTORABLE_TABLES = {"profiles"}


def days_remaining(item: DeletedItemTrash, now: Optional[datetime] = None) -> int:
    now = now or datetime.utcnow()
    return max((item.auto_purge_at - now).days, 0)


def _get_active_item(repo: FinanceRepository, item_id: int) -> DeletedItemTrash:
    item = repo.get_trash_item(item_id)
    if not item or item.permanently_deleted_at is not None:
        raise HTTPException(status_code=404, detail="Trash item not found")
    return item


def list_trash(repo: FinanceRepository, now: Optional[datetime] = None) -> list[dict]:
    now = now or datetime.utcnow()
    return [
        {
            "id": item.id,
            "original_table": item.original_table,
            "original_id": item.original_id,
            "item_data": item.item_data,
            "deleted_by": item.deleted_by,
            "deleted_at": item.deleted_at,
            "auto_purge_at": item.auto_purge_at,
            "days_remaining": days_remaining(item, now),
        }
        for item in repo.list_active_trash()
    ]


def restore_item(repo: FinanceRepository, item_id: int) -> DeletedItemTrash:
    # Payments and plans cancelled with the member stay cancelled
    item = _get_active_item(repo, item_id)

    if item.original_table not in RESTORABLE_TABLES:
        raise HTTPException(
            status_code=400,
            detail=f"Items from '{item.original_table}' cannot be restored"
        )

    profile = repo.get_profile(item.original_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Original client no longer exists")

    now = datetime.utcnow()
    profile.enrollment_status = "active"
    item.restore_attempted_at = now
    item.permanently_deleted_at = now
    repo.commit()

    logger.info("Restored client %s from trash item %s", profile.id, item.id)
    return item


def delete_item(repo: FinanceRepository, item_id: int) -> DeletedItemTrash:
    item = _get_active_item(repo, item_id)
    item.permanently_deleted_at = datetime.utcnow()
    repo.commit()
    return item


def purge_all(repo: FinanceRepository) -> int:
    purged = repo.purge_active_trash(datetime.utcnow())
    repo.commit()
    return purged
