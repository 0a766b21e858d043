from decimal import Decimal
from typing import Dict, List
from pydantic import BaseModel

class SettlementOut(BaseModel):
    from_id: str
    from_name: str | None = None
    to_id: str
    to_name: str | None = None
    amount: Decimal

class GroupBalanceOut(BaseModel):
    net: Dict[str, Decimal]
    settlements: List[SettlementOut]

class OverallBalanceOut(BaseModel):
    net: Dict[str, Decimal]
    total_owed: Decimal
    total_debt: Decimal
    total_expenses: Decimal
    settlements: List[SettlementOut]

class PersonBalanceOut(BaseModel):
    person_id: str
    net_balance: Decimal
