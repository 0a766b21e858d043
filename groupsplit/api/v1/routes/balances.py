from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from groupsplit.db.session import get_db
from groupsplit.schemas.balances import OverallBalanceOut, PersonBalanceOut
from groupsplit.services.balance_services import get_overall_balances, get_person_balance

router = APIRouter()

@router.get("/overall", response_model=OverallBalanceOut)
async def overall_balances(db: AsyncSession = Depends(get_db)):
    return await get_overall_balances(db)

@router.get("/person/{person_id}", response_model=PersonBalanceOut)
async def person_balance(person_id: str, db: AsyncSession = Depends(get_db)):
    return await get_person_balance(db, person_id)
