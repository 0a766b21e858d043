from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from groupsplit.models.group import Group
from groupsplit.models.group_member import GroupMember

async def get_group_or_404(db: AsyncSession, group_id: str) -> Group:
    q = (
        select(Group)
        .options(selectinload(Group.members))
        .where(Group.id == group_id)
        .execution_options(populate_existing=True)
    )
    res = await db.execute(q)
    group = res.scalar_one_or_none()

    if not group:
        raise HTTPException(404, "Group not found")

    return group

async def check_group_membership(db: AsyncSession, group_id: str, person_id: str):
    q = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.person_id == person_id
    )
    res = await db.execute(q)
    member = res.scalar_one_or_none()

    if not member:
        raise HTTPException(403, "Person is not a member of this group")

    return member
