from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


PaymentMethod = Literal["cash", "pix", "card"]


class PayInstallmentRequest(BaseModel):
    method: PaymentMethod = "cash"


class StandalonePaymentRequest(BaseModel):
    amount: float = Field(..., gt=0)
    method: PaymentMethod = "cash"
    description: Optional[str] = None


class PaymentResponse(BaseModel):
    id: int
    client_id: int
    plan_id: Optional[int] = None
    amount: float
    late_fee: Optional[float] = None
    due_date: Optional[date] = None
    paid_at: Optional[datetime] = None
    payment_method: str
    receipt_number: Optional[str] = None
    status: str
    description: Optional[str] = None
    installment_number: int
    total_installments: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DefaulterContact(BaseModel):
    full_name: str
    username: str
    phone: Optional[str] = None
    email: Optional[str] = None


class DefaulterResponse(BaseModel):
    id: int
    client_id: int
    amount: float
    due_date: date
    description: Optional[str] = None
    days_overdue: int
    client: DefaulterContact
