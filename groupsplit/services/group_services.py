import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from fastapi import HTTPException
from groupsplit.models.group import Group
from groupsplit.models.group_member import GroupMember
from groupsplit.models.expense import Expense
from groupsplit.models.person import Person
from groupsplit.schemas.group import GroupCreate, GroupOut
from groupsplit.services.person_service import get_persons_by_ids
from groupsplit.core.categories import EXPENSE_CATEGORIES
from groupsplit.core.dependencies import get_group_or_404

logger = logging.getLogger(__name__)

def group_out(group: Group) -> GroupOut:
    return GroupOut(
        id=group.id,
        name=group.name,
        member_ids=[m.person_id for m in group.members]
    )

async def _existing_person_ids(db: AsyncSession, member_ids: List[str]) -> List[str]:
    # keep first occurrence order, drop repeats
    ids = list(dict.fromkeys(member_ids))
    persons = await get_persons_by_ids(db, ids)

    missing = [pid for pid in ids if pid not in persons]
    if missing:
        raise HTTPException(404, f"Unknown person ids: {', '.join(missing)}")

    return ids

async def create_group(db: AsyncSession, data: GroupCreate):
    name = data.name.strip()
    if not name:
        raise HTTPException(400, "Group name is required")

    member_ids = await _existing_person_ids(db, data.member_ids)

    group = Group(name=name)
    db.add(group)
    await db.flush()

    for pid in member_ids:
        db.add(GroupMember(group_id=group.id, person_id=pid))

    await db.commit()

    logger.info("created group %s with %d members", group.id, len(member_ids))
    return group_out(await get_group_or_404(db, group.id))

async def list_groups(db: AsyncSession):
    q = (
        select(Group)
        .options(selectinload(Group.members))
        .order_by(Group.created_at, Group.name)
    )
    result = await db.execute(q)
    return [group_out(g) for g in result.scalars().all()]

async def get_group(db: AsyncSession, group_id: str):
    return group_out(await get_group_or_404(db, group_id))

async def add_members(db: AsyncSession, group_id: str, member_ids: List[str]):
    group = await get_group_or_404(db, group_id)
    ids = await _existing_person_ids(db, member_ids)

    current = {m.person_id for m in group.members}
    new_ids = [pid for pid in ids if pid not in current]

    for pid in new_ids:
        db.add(GroupMember(group_id=group_id, person_id=pid))

    await db.commit()

    if new_ids:
        logger.info("added %d members to group %s", len(new_ids), group_id)

    return group_out(await get_group_or_404(db, group_id))

async def get_group_member_ids(db: AsyncSession, group_id: str) -> List[str]:
    group = await get_group_or_404(db, group_id)
    return [m.person_id for m in group.members]

async def list_group_members(db: AsyncSession, group_id: str):
    await get_group_or_404(db, group_id)

    members_q = (
        select(Person)
        .join(GroupMember, Person.id == GroupMember.person_id)
        .where(GroupMember.group_id == group_id)
        .order_by(GroupMember.id)
    )

    result = await db.execute(members_q)
    return result.scalars().all()

async def get_group_expenses(db: AsyncSession, group_id: str, category_id: str | None = None):
    q = (
        select(Expense)
        .options(selectinload(Expense.splits))
        .where(
            Expense.group_id == group_id,
            Expense.is_deleted == False
        )
        .order_by(Expense.date, Expense.created_at, Expense.id)
    )

    if category_id:
        q = q.where(Expense.category_id == category_id)

    res = await db.execute(q)
    return res.scalars().all()

async def list_group_expenses(db: AsyncSession, group_id: str, category_id: str | None = None):
    await get_group_or_404(db, group_id)

    if category_id and category_id not in EXPENSE_CATEGORIES:
        raise HTTPException(400, f"Unknown category '{category_id}'")

    return await get_group_expenses(db, group_id, category_id)
