from fastapi import HTTPException

from gym_admin.models.profile import Profile
from gym_admin.repositories.finance_repository import FinanceRepository


def get_client_or_404(repo: FinanceRepository, client_id: int) -> Profile:
    profile = repo.get_profile(client_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Client not found")
    return profile
