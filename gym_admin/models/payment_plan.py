from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from gym_admin.db.base import Base


class PaymentPlan(Base):
    __tablename__ = "payment_plans"

    id = Column(Integer, primary_key=True, index=True)

    client_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    total_amount = Column(Float, nullable=False)
    installments = Column(Integer, nullable=False)
    installment_amount = Column(Float, nullable=False)
    discount_percentage = Column(Float, nullable=False, default=0)

    status = Column(String, nullable=False, default="active")
    start_date = Column(Date, nullable=False)
    description = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    client = relationship("Profile")
