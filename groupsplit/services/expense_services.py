import logging
from decimal import Decimal
from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from fastapi import HTTPException
from groupsplit.models.expense import Expense
from groupsplit.models.expense_split import ExpenseSplit
from groupsplit.schemas.expense import ExpenseCreate
from groupsplit.core.categories import EXPENSE_CATEGORIES, SETTLE_CATEGORY
from groupsplit.core.utils import EPSILON, split_equally, split_by_percentage
from groupsplit.services.group_services import get_group_member_ids

logger = logging.getLogger(__name__)

def build_splits(data: ExpenseCreate) -> List[Tuple[str, Decimal]]:
    member_ids = [s.member_id for s in data.splits]

    try:
        if data.split_method == "equal":
            return split_equally(data.amount, member_ids)

        if data.split_method == "percentage":
            if any(s.percentage is None for s in data.splits):
                raise ValueError("Every split needs a percentage")
            return split_by_percentage(
                data.amount,
                [(s.member_id, s.percentage) for s in data.splits]
            )
    except ValueError as e:
        raise HTTPException(400, str(e))

    if any(s.amount is None for s in data.splits):
        raise HTTPException(400, "Every split needs an amount")

    return [(s.member_id, s.amount) for s in data.splits]

async def load_expense(db: AsyncSession, expense_id: str):
    q = (
        select(Expense)
        .options(selectinload(Expense.splits))
        .where(Expense.id == expense_id, Expense.is_deleted == False)
        .execution_options(populate_existing=True)
    )
    res = await db.execute(q)
    return res.scalar_one_or_none()

async def add_expense_record(
    db: AsyncSession,
    group_id: str,
    paid_by: str,
    amount: Decimal,
    splits: List[Tuple[str, Decimal]],
    description: str | None,
    category_id: str,
    date=None
) -> Expense:
    """Stage an expense and its splits; the caller commits."""
    expense = Expense(
        group_id=group_id,
        paid_by=paid_by,
        amount=amount,
        description=description,
        category_id=category_id
    )
    if date is not None:
        expense.date = date

    db.add(expense)
    await db.flush()  # gives expense.id

    for member_id, share in splits:
        db.add(ExpenseSplit(
            expense_id=expense.id,
            member_id=member_id,
            amount=share
        ))

    return expense

async def create_expense(db: AsyncSession, data: ExpenseCreate):
    # 1. Validate positive amount
    if data.amount <= 0:
        raise HTTPException(400, "Amount must be positive")

    # 2. Settlements only come from the settle up flow
    if data.category_id not in EXPENSE_CATEGORIES:
        raise HTTPException(400, f"Unknown category '{data.category_id}'")
    if data.category_id == SETTLE_CATEGORY:
        raise HTTPException(400, "Use settle up to record settlements")

    # 3. Payer has to be part of the group
    group_members = set(await get_group_member_ids(db, data.group_id))
    if data.paid_by not in group_members:
        raise HTTPException(400, "Payer is not a member of the group")

    if not data.splits:
        raise HTTPException(400, "Expense must be split with at least one member")

    # 4. Check duplicates
    member_ids = [s.member_id for s in data.splits]
    if len(member_ids) != len(set(member_ids)):
        raise HTTPException(400, "Duplicate members found in splits")

    # 5. Everyone in the split is a group member
    if not set(member_ids) <= group_members:
        raise HTTPException(400, "Some members in split are not group members")

    splits = build_splits(data)

    if any(share < 0 for _, share in splits):
        raise HTTPException(400, "Split amounts cannot be negative")

    # 6. Split total matches the amount
    total = sum((share for _, share in splits), Decimal("0"))
    if abs(total - data.amount) > EPSILON:
        raise HTTPException(400, "Sum of split amounts must equal total amount")

    expense = await add_expense_record(
        db,
        group_id=data.group_id,
        paid_by=data.paid_by,
        amount=data.amount,
        splits=splits,
        description=data.description,
        category_id=data.category_id,
        date=data.date
    )
    await db.commit()

    logger.info(
        "expense %s: %s paid %s in group %s (%d splits)",
        expense.id, data.paid_by, data.amount, data.group_id, len(splits)
    )
    return await load_expense(db, expense.id)

async def get_expense_by_id(db: AsyncSession, expense_id: str):
    expense = await load_expense(db, expense_id)

    if not expense:
        raise HTTPException(404, "Expense not found")

    return expense

async def delete_expense(db: AsyncSession, expense_id: str):
    expense = await get_expense_by_id(db, expense_id)

    # soft delete, splits stay for history
    expense.is_deleted = True
    await db.commit()

    logger.info("expense %s deleted", expense_id)
    return {"status": "deleted"}

async def get_live_expenses(db: AsyncSession):
    q = (
        select(Expense)
        .options(selectinload(Expense.splits))
        .where(Expense.is_deleted == False)
        .order_by(Expense.date, Expense.created_at, Expense.id)
    )
    res = await db.execute(q)
    return res.scalars().all()
