from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel

from gym_admin.schemas.payment import PaymentResponse
from gym_admin.schemas.payment_plan import PaymentPlanResponse


class FreezeRequest(BaseModel):
    end_date: date
    start_date: Optional[date] = None


class ProfileResponse(BaseModel):
    id: int
    username: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    enrollment_status: str
    enrollment_date: Optional[date] = None
    freeze_start_date: Optional[date] = None
    freeze_end_date: Optional[date] = None
    monthly_fee: float

    class Config:
        from_attributes = True


class AccessLogResponse(BaseModel):
    id: int
    check_in_at: datetime
    check_out_at: Optional[datetime] = None
    access_method: str

    class Config:
        from_attributes = True


class ClientStats(BaseModel):
    total_paid: float
    total_pending: float
    overdue_count: int
    total_plans: int
    completed_plans: int
    access_count: int


class DuplicateSummaryResponse(BaseModel):
    has_duplicates: bool
    duplicate_payments: int
    duplicate_plans: int
    payment_ids: List[int]
    plan_ids: List[int]


class ClientHistoryResponse(BaseModel):
    profile: ProfileResponse
    payments: List[PaymentResponse]
    plans: List[PaymentPlanResponse]
    access_logs: List[AccessLogResponse]
    stats: ClientStats
    duplicates: DuplicateSummaryResponse


class ReconciliationResponse(BaseModel):
    message: str
    payments_removed: int
    plans_removed: int
    plan_payments_removed: int
    total_removed: int
