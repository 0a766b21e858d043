from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from groupsplit.db.session import Base

class ExpenseSplit(Base):
    __tablename__ = "expense_splits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    expense_id = Column(String(36), ForeignKey("expenses.id"), nullable=False, index=True)
    member_id = Column(String(36), ForeignKey("persons.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)

    expense = relationship("Expense", back_populates="splits")
