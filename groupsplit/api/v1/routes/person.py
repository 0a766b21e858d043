from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from groupsplit.db.session import get_db
from groupsplit.schemas.person import PersonCreate, PersonOut
from groupsplit.services.person_service import create_person, get_all_persons, get_person_by_id, delete_person

router = APIRouter()

@router.post("/", response_model=PersonOut, status_code=201)
async def add_person(data: PersonCreate, db: AsyncSession = Depends(get_db)):
    return await create_person(db, data)

@router.get("/", response_model=list[PersonOut])
async def get_all(db: AsyncSession = Depends(get_db)):
    return await get_all_persons(db)

@router.get("/{person_id}", response_model=PersonOut)
async def get_person(person_id: str, db: AsyncSession = Depends(get_db)):
    person = await get_person_by_id(db, person_id)

    if not person:
        raise HTTPException(status_code=404, detail="Person not found")

    return person

@router.delete("/{person_id}")
async def del_person(person_id: str, db: AsyncSession = Depends(get_db)):
    return await delete_person(db, person_id)
