from typing import List
from pydantic import BaseModel

class GroupCreate(BaseModel):
    name: str
    member_ids: List[str] = []

class GroupMembersAdd(BaseModel):
    member_ids: List[str]

class GroupOut(BaseModel):
    id: str
    name: str
    member_ids: List[str]
