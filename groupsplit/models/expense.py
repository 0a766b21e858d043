import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, Numeric, Boolean, false
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from groupsplit.db.session import Base

class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    group_id = Column(String(36), ForeignKey("groups.id"), nullable=False, index=True)
    paid_by = Column(String(36), ForeignKey("persons.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(String, nullable=True)
    category_id = Column(String(32), nullable=False, default="other", server_default="other")
    date = Column(DateTime(timezone=True), server_default=func.now())
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    is_deleted = Column(Boolean, nullable=False, default=False, server_default=false())

    splits = relationship(
        "ExpenseSplit",
        back_populates="expense",
        cascade="all, delete",
        order_by="ExpenseSplit.id"
    )
