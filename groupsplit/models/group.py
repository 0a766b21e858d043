import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from groupsplit.db.session import Base

class Group(Base):
    __tablename__ = 'groups'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    members = relationship(
        "GroupMember",
        back_populates="group",
        cascade="all, delete",
        order_by="GroupMember.id"
    )
