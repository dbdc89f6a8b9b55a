from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from gym_admin.db.base import Base


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)

    client_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    # Standalone charges have no plan
    plan_id = Column(Integer, ForeignKey("payment_plans.id"), nullable=True, index=True)

    amount = Column(Float, nullable=False)
    late_fee = Column(Float, nullable=True)

    due_date = Column(Date, nullable=True)
    paid_at = Column(DateTime, nullable=True)
    payment_method = Column(String, nullable=False, default="pending")
    receipt_number = Column(String, nullable=True)

    status = Column(String, nullable=False, default="pending")
    description = Column(String, nullable=True)

    installment_number = Column(Integer, nullable=False, default=1)
    total_installments = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, default=datetime.utcnow)

    client = relationship("Profile")
    plan = relationship("PaymentPlan")
