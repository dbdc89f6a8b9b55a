from dataclasses import dataclass, field
from datetime import timedelta
from typing import Hashable, Optional, Sequence

from gym_admin.core.config import settings
from gym_admin.models.payment import Payment
from gym_admin.models.payment_plan import PaymentPlan


DUPLICATE_PLAN_WINDOW = timedelta(seconds=settings.DUPLICATE_PLAN_WINDOW_SECONDS)


def _round_money(value: float) -> float:
    return round(float(value or 0), 2)


def payment_key(payment: Payment) -> tuple[Optional[int], int, float]:
    # plan_id stays None for standalone charges; it never collides with a real id
    return (payment.plan_id, payment.installment_number, _round_money(payment.amount))


def find_duplicate_payments(payments: Sequence[Payment]) -> list[Payment]:
    seen: dict[Hashable, Payment] = {}
    duplicates: list[Payment] = []

    for payment in payments:
        key = payment_key(payment)
        if key in seen:
            duplicates.append(payment)
        else:
            seen[key] = payment

    return duplicates


def plans_match(
    first: PaymentPlan,
    second: PaymentPlan,
    window: timedelta = DUPLICATE_PLAN_WINDOW,
) -> bool:
    if _round_money(first.total_amount) != _round_money(second.total_amount):
        return False
    if first.installments != second.installments:
        return False
    if first.start_date != second.start_date:
        return False
    if first.created_at is None or second.created_at is None:
        return False
    return abs(first.created_at - second.created_at) < window


def find_duplicate_plans(
    plans: Sequence[PaymentPlan],
    window: timedelta = DUPLICATE_PLAN_WINDOW,
) -> list[PaymentPlan]:
    # The flagged plan is chosen by position in the newest-first input, not by created_at
    flagged: set[int] = set()

    for i in range(len(plans)):
        for j in range(i + 1, len(plans)):
            if j in flagged:
                continue
            if plans_match(plans[i], plans[j], window):
                flagged.add(j)

    return [plan for index, plan in enumerate(plans) if index in flagged]


@dataclass
class DuplicateSummary:
    payments: list[Payment] = field(default_factory=list)
    plans: list[PaymentPlan] = field(default_factory=list)

    @property
    def payment_ids(self) -> list[int]:
        return [p.id for p in self.payments]

    @property
    def plan_ids(self) -> list[int]:
        return [p.id for p in self.plans]

    @property
    def has_duplicates(self) -> bool:
        return bool(self.payments or self.plans)

    def as_dict(self) -> dict:
        return {
            "has_duplicates": self.has_duplicates,
            "duplicate_payments": len(self.payments),
            "duplicate_plans": len(self.plans),
            "payment_ids": self.payment_ids,
            "plan_ids": self.plan_ids,
        }


def summarize_duplicates(
    payments: Sequence[Payment],
    plans: Sequence[PaymentPlan],
) -> DuplicateSummary:
    return DuplicateSummary(
        payments=find_duplicate_payments(payments),
        plans=find_duplicate_plans(plans),
    )
