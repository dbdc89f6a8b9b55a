from sqlalchemy import Boolean, Column, ForeignKey, Integer

from gym_admin.db.base import Base


class InstructorClient(Base):
    __tablename__ = "instructor_clients"

    id = Column(Integer, primary_key=True, index=True)

    instructor_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    client_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)

    is_active = Column(Boolean, default=True)
