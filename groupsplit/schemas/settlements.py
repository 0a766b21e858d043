from pydantic import BaseModel
from groupsplit.schemas.expense import Money

class SettlementCreate(BaseModel):
    from_id: str
    to_id: str
    amount: Money
