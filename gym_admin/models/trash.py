from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String

from gym_admin.db.base import Base


class DeletedItemTrash(Base):
    __tablename__ = "deleted_items_trash"

    id = Column(Integer, primary_key=True, index=True)

    original_table = Column(String, nullable=False)
    original_id = Column(Integer, nullable=False)
    # Summary snapshot, not the raw rows
    item_data = Column(JSON, nullable=False, default=dict)

    deleted_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    deleted_at = Column(DateTime, default=datetime.utcnow)
    auto_purge_at = Column(DateTime, nullable=False)

    restore_attempted_at = Column(DateTime, nullable=True)
    permanently_deleted_at = Column(DateTime, nullable=True)
