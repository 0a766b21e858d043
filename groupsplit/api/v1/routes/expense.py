from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from groupsplit.db.session import get_db
from groupsplit.core.categories import EXPENSE_CATEGORIES
from groupsplit.schemas.expense import ExpenseCreate, ExpenseOut, CategoryOut
from groupsplit.services.expense_services import create_expense, delete_expense, get_expense_by_id

router = APIRouter()

@router.get("/categories", response_model=list[CategoryOut])
async def categories():
    return [{"id": cid, "name": name} for cid, name in EXPENSE_CATEGORIES.items()]

@router.post("/", response_model=ExpenseOut, status_code=201)
async def add_expense(data: ExpenseCreate, db: AsyncSession = Depends(get_db)):
    return await create_expense(db, data)

@router.get("/{expense_id}", response_model=ExpenseOut)
async def fetch(expense_id: str, db: AsyncSession = Depends(get_db)):
    return await get_expense_by_id(db, expense_id)

@router.delete("/{expense_id}")
async def del_expense(expense_id: str, db: AsyncSession = Depends(get_db)):
    return await delete_expense(db, expense_id)
