from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from gym_admin.schemas.payment import PaymentResponse


class PaymentPlanCreate(BaseModel):
    client_id: int
    total_amount: float = Field(..., gt=0)
    installments: int = Field(1, ge=1, le=12)
    discount: float = Field(0, ge=0, le=100)
    description: Optional[str] = None
    start_date: Optional[date] = None


class PaymentPlanResponse(BaseModel):
    id: int
    client_id: int
    created_by: Optional[int] = None
    total_amount: float
    installments: int
    installment_amount: float
    discount_percentage: float
    status: str
    start_date: date
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PaymentPlanDetail(BaseModel):
    plan: PaymentPlanResponse
    payments: List[PaymentResponse]
    paid_count: int
    total_count: int
