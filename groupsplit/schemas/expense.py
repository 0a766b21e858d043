from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Literal
from pydantic import BaseModel, Field, computed_field
from groupsplit.core import categories

# matches the Numeric(10, 2) columns, anything finer would be rounded on save
Money = Annotated[Decimal, Field(max_digits=10, decimal_places=2)]

class SplitInput(BaseModel):
    member_id: str
    amount: Money | None = None
    percentage: Decimal | None = None

class ExpenseCreate(BaseModel):
    group_id: str
    paid_by: str
    amount: Money
    description: str | None = None
    category_id: str = "other"
    date: datetime | None = None
    split_method: Literal["exact", "equal", "percentage"] = "exact"
    splits: List[SplitInput]

class SplitOut(BaseModel):
    member_id: str
    amount: Decimal

    class Config:
        from_attributes = True

class ExpenseOut(BaseModel):
    id: str
    group_id: str
    amount: Decimal
    description: str | None = None
    paid_by: str
    category_id: str
    date: datetime | None = None
    splits: List[SplitOut]

    class Config:
        from_attributes = True

    @computed_field
    @property
    def category_name(self) -> str:
        return categories.category_name(self.category_id)

class CategoryOut(BaseModel):
    id: str
    name: str
