from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from gym_admin.db.base import Base


class AccessLog(Base):
    __tablename__ = "access_logs"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)

    check_in_at = Column(DateTime, default=datetime.utcnow)
    check_out_at = Column(DateTime, nullable=True)
    access_method = Column(String, nullable=False, default="manual")
