from fastapi import APIRouter, Depends

from gym_admin.core.dependencies import get_finance_repository, require_role
from gym_admin.repositories.finance_repository import FinanceRepository
from gym_admin.services.audit_service import log_action
from gym_admin.services.trash_service import (
    delete_item,
    list_trash,
    purge_all,
    restore_item,
)

router = APIRouter(prefix="/admin/trash", tags=["Trash"])


@router.get("")
def get_trash(
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    return list_trash(repo)


@router.post("/{item_id}/restore")
def restore_trash_item(
    item_id: int,
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    item = restore_item(repo, item_id)

    log_action(
        db=repo.db,
        user_id=user.id,
        action="RESTORE_TRASH_ITEM",
        entity_type="DeletedItemTrash",
        entity_id=item_id,
        details=f"Restored {item.original_table} {item.original_id}"
    )

    return {"message": "Item restored successfully"}


@router.delete("/{item_id}")
def delete_trash_item(
    item_id: int,
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    delete_item(repo, item_id)

    log_action(
        db=repo.db,
        user_id=user.id,
        action="PURGE_TRASH_ITEM",
        entity_type="DeletedItemTrash",
        entity_id=item_id,
    )

    return {"message": "Item permanently removed"}


@router.delete("")
def empty_trash(
    repo: FinanceRepository = Depends(get_finance_repository),
    user=Depends(require_role(["admin"]))
):
    purged = purge_all(repo)

    log_action(
        db=repo.db,
        user_id=user.id,
        action="EMPTY_TRASH",
        entity_type="DeletedItemTrash",
        details=f"Items purged: {purged}"
    )

    return {"message": "Trash emptied", "purged": purged}
