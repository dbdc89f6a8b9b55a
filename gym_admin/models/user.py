from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from gym_admin.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String)
    email = Column(String, unique=True)
    hashed_password = Column(String)

    role_id = Column(Integer, ForeignKey("roles.id"))

    role = relationship("Role")
