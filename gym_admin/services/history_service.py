from datetime import date
from typing import Optional

from gym_admin.repositories.finance_repository import FinanceRepository
from gym_admin.services.client_service import get_client_or_404
from gym_admin.services.duplicate_service import summarize_duplicates


def _round_money(value: float) -> float:
    return round(float(value or 0), 2)


def client_stats(payments, plans, access_logs, today: date) -> dict:
    paid = [p for p in payments if p.status == "paid"]
    pending = [p for p in payments if p.status == "pending"]

    return {
        "total_paid": _round_money(sum(p.amount + (p.late_fee or 0) for p in paid)),
        "total_pending": _round_money(sum(p.amount for p in pending)),
        "overdue_count": len([
            p for p in pending
            if p.due_date and p.due_date < today
        ]),
        "total_plans": len(plans),
        "completed_plans": len([p for p in plans if p.status == "completed"]),
        "access_count": len(access_logs),
    }


def get_client_history(
    repo: FinanceRepository,
    client_id: int,
    today: Optional[date] = None,
) -> dict:
    profile = get_client_or_404(repo, client_id)

    payments = repo.list_client_payments(client_id)
    plans = repo.list_client_plans(client_id)
    access_logs = repo.list_access_logs(client_id)

    return {
        "profile": profile,
        "payments": payments,
        "plans": plans,
        "access_logs": access_logs,
        "stats": client_stats(payments, plans, access_logs, today or date.today()),
        "duplicates": summarize_duplicates(payments, plans).as_dict(),
    }
