from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, Integer, String

from gym_admin.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False)
    full_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    # active -> frozen -> active, or active/frozen -> cancelled
    enrollment_status = Column(String, nullable=False, default="active")
    enrollment_date = Column(Date, nullable=True)
    freeze_start_date = Column(Date, nullable=True)
    freeze_end_date = Column(Date, nullable=True)

    monthly_fee = Column(Float, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
