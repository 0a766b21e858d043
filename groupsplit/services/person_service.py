import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete
from sqlalchemy.future import select
from groupsplit.models.person import Person
from groupsplit.models.group_member import GroupMember
from groupsplit.models.expense import Expense
from groupsplit.models.expense_split import ExpenseSplit
from groupsplit.schemas.person import PersonCreate
from fastapi import HTTPException

logger = logging.getLogger(__name__)

async def get_person_by_email(db: AsyncSession, email: str):
    result = await db.execute(select(Person).where(Person.email == email))
    return result.scalar_one_or_none()

async def get_person_by_id(db: AsyncSession, id: str):
    result = await db.execute(select(Person).where(Person.id == id))
    return result.scalar_one_or_none()

async def get_all_persons(db: AsyncSession):
    result = await db.execute(select(Person).order_by(Person.created_at, Person.name))
    return result.scalars().all()

async def get_persons_by_ids(db: AsyncSession, ids):
    result = await db.execute(select(Person).where(Person.id.in_(list(ids))))
    return {p.id: p for p in result.scalars().all()}

async def create_person(db: AsyncSession, data: PersonCreate):
    name = data.name.strip()
    if not name:
        raise HTTPException(400, "Name is required")

    email = data.email.strip().lower() if data.email else None
    if email and await get_person_by_email(db, email):
        raise HTTPException(409, "A person with this email already exists")

    person = Person(
        name=name,
        email=email,
        avatar_url=data.avatar_url
    )

    db.add(person)
    await db.commit()
    await db.refresh(person)

    logger.info("created person %s (%s)", person.id, person.name)
    return person

async def delete_person(db: AsyncSession, person_id: str):
    person = await get_person_by_id(db, person_id)

    if not person:
        raise HTTPException(404, "Person not found")

    # a person still referenced by live expenses would skew everyone's balances
    q = (
        select(Expense.id)
        .outerjoin(ExpenseSplit, Expense.id == ExpenseSplit.expense_id)
        .where(
            Expense.is_deleted == False,
            (Expense.paid_by == person_id) | (ExpenseSplit.member_id == person_id)
        )
        .limit(1)
    )
    res = await db.execute(q)

    if res.first():
        raise HTTPException(409, "Person is part of existing expenses")

    await db.execute(delete(GroupMember).where(GroupMember.person_id == person_id))
    await db.delete(person)
    await db.commit()

    return {"status": "deleted"}
