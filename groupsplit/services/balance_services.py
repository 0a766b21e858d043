from decimal import Decimal
from typing import Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException
from groupsplit.core.utils import qround, calculate_balances, simplify_debts, SimplifiedDebt
from groupsplit.services.person_service import get_all_persons, get_persons_by_ids, get_person_by_id
from groupsplit.services.group_services import get_group_member_ids, get_group_expenses
from groupsplit.services.expense_services import get_live_expenses

async def get_group_debts(db: AsyncSession, group_id: str):
    member_ids = await get_group_member_ids(db, group_id)
    expenses = await get_group_expenses(db, group_id)

    balances = calculate_balances(member_ids, expenses)
    return balances, simplify_debts(balances)

async def describe_settlements(db: AsyncSession, transfers: List[SimplifiedDebt]):
    if not transfers:
        return []

    person_ids = {p for t in transfers for p in (t.from_id, t.to_id)}
    persons = await get_persons_by_ids(db, person_ids)
    names = {pid: p.name for pid, p in persons.items()}

    return [
        {
            "from_id": f,
            "from_name": names.get(f),
            "to_id": t,
            "to_name": names.get(t),
            "amount": qround(a)
        }
        for f, t, a in transfers
    ]

def _rounded(balances: Dict[str, Decimal]):
    return {uid: qround(amt) for uid, amt in balances.items()}

async def get_group_settlement_plan(db: AsyncSession, group_id: str):
    balances, transfers = await get_group_debts(db, group_id)

    return {
        "net": _rounded(balances),
        "settlements": await describe_settlements(db, transfers)
    }

async def get_overall_balances(db: AsyncSession):
    persons = await get_all_persons(db)
    expenses = await get_live_expenses(db)

    balances = calculate_balances([p.id for p in persons], expenses)
    transfers = simplify_debts(balances)

    total_owed = sum((v for v in balances.values() if v > 0), Decimal("0"))
    total_debt = sum((v for v in balances.values() if v < 0), Decimal("0"))
    total_expenses = sum((Decimal(str(e.amount)) for e in expenses), Decimal("0"))

    return {
        "net": _rounded(balances),
        "total_owed": qround(total_owed),
        "total_debt": qround(total_debt),
        "total_expenses": qround(total_expenses),
        "settlements": await describe_settlements(db, transfers)
    }

async def get_person_balance(db: AsyncSession, person_id: str):
    if not await get_person_by_id(db, person_id):
        raise HTTPException(404, "Person not found")

    expenses = await get_live_expenses(db)
    balances = calculate_balances([person_id], expenses)

    return {
        "person_id": person_id,
        "net_balance": qround(balances[person_id])
    }
