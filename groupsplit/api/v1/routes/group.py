from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from groupsplit.db.session import get_db
from groupsplit.schemas.group import GroupCreate, GroupMembersAdd, GroupOut
from groupsplit.schemas.person import PersonOut
from groupsplit.schemas.expense import ExpenseOut
from groupsplit.schemas.balances import GroupBalanceOut
from groupsplit.schemas.settlements import SettlementCreate
from groupsplit.services.group_services import create_group, list_groups, get_group, add_members, list_group_members, list_group_expenses
from groupsplit.services.balance_services import get_group_settlement_plan
from groupsplit.services.settlement_service import settle_up_group, add_settlement

router = APIRouter()

@router.post("/", response_model=GroupOut, status_code=201, description="create new group")
async def create_new_group(data: GroupCreate, db: AsyncSession = Depends(get_db)):
    return await create_group(db, data)

@router.get("/", response_model=list[GroupOut])
async def all_groups(db: AsyncSession = Depends(get_db)):
    return await list_groups(db)

@router.get("/{group_id}", response_model=GroupOut)
async def fetch_group(group_id: str, db: AsyncSession = Depends(get_db)):
    return await get_group(db, group_id)

@router.post("/{group_id}/members", response_model=GroupOut)
async def add_group_members(
    group_id: str,
    data: GroupMembersAdd,
    db: AsyncSession = Depends(get_db)
):
    return await add_members(db, group_id, data.member_ids)

@router.get("/{group_id}/members", response_model=list[PersonOut])
async def group_members(group_id: str, db: AsyncSession = Depends(get_db)):
    return await list_group_members(db, group_id)

@router.get("/{group_id}/expenses", response_model=list[ExpenseOut], description="get all expenses of the group")
async def fetch_expenses(
    group_id: str,
    category: str | None = None,
    db: AsyncSession = Depends(get_db)
):
    return await list_group_expenses(db, group_id, category)

@router.get("/{group_id}/balances", response_model=GroupBalanceOut)
async def group_balances(group_id: str, db: AsyncSession = Depends(get_db)):
    return await get_group_settlement_plan(db, group_id)

@router.post("/{group_id}/settle-up", response_model=list[ExpenseOut], description="settle every outstanding debt")
async def settle_up(group_id: str, db: AsyncSession = Depends(get_db)):
    return await settle_up_group(db, group_id)

@router.post("/{group_id}/settlements", response_model=ExpenseOut, status_code=201)
async def add_manual_settlement(
    group_id: str,
    data: SettlementCreate,
    db: AsyncSession = Depends(get_db)
):
    return await add_settlement(db, group_id, data)
