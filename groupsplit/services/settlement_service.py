import logging
from typing import Dict
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException
from groupsplit.core.categories import SETTLE_CATEGORY
from groupsplit.core.dependencies import check_group_membership, get_group_or_404
from groupsplit.core.utils import qround, SimplifiedDebt
from groupsplit.schemas.settlements import SettlementCreate
from groupsplit.services.balance_services import get_group_debts
from groupsplit.services.expense_services import add_expense_record, load_expense
from groupsplit.services.person_service import get_persons_by_ids

logger = logging.getLogger(__name__)

def settlement_description(names: Dict[str, str], debt: SimplifiedDebt) -> str:
    return (
        f"Settle up: {names.get(debt.from_id, 'Unknown')} "
        f"paid {names.get(debt.to_id, 'Unknown')}"
    )

async def _record_settlement(db: AsyncSession, group_id: str, debt: SimplifiedDebt, names: Dict[str, str]):
    amount = qround(debt.amount)
    return await add_expense_record(
        db,
        group_id=group_id,
        paid_by=debt.from_id,
        amount=amount,
        splits=[(debt.to_id, amount)],
        description=settlement_description(names, debt),
        category_id=SETTLE_CATEGORY
    )

async def _names(db: AsyncSession, debts):
    persons = await get_persons_by_ids(db, {p for d in debts for p in (d.from_id, d.to_id)})
    return {pid: p.name for pid, p in persons.items()}

async def settle_up_group(db: AsyncSession, group_id: str):
    """Turn every simplified debt of the group into a settlement expense."""
    _, debts = await get_group_debts(db, group_id)

    if not debts:
        return []

    names = await _names(db, debts)
    created = [await _record_settlement(db, group_id, d, names) for d in debts]
    await db.commit()

    logger.info("group %s settled with %d transfers", group_id, len(created))
    return [await load_expense(db, e.id) for e in created]

async def add_settlement(db: AsyncSession, group_id: str, data: SettlementCreate):
    if data.from_id == data.to_id:
        raise HTTPException(400, "Cannot settle a debt with yourself")

    if data.amount <= 0:
        raise HTTPException(400, "Settlement amount must be positive")

    await get_group_or_404(db, group_id)
    await check_group_membership(db, group_id, data.from_id)
    await check_group_membership(db, group_id, data.to_id)

    debt = SimplifiedDebt(data.from_id, data.to_id, data.amount)
    expense = await _record_settlement(db, group_id, debt, await _names(db, [debt]))
    await db.commit()

    logger.info("settlement %s: %s paid %s %s", expense.id, debt.from_id, debt.to_id, debt.amount)
    return await load_expense(db, expense.id)
