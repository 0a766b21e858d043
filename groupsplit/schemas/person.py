from datetime import datetime
from pydantic import BaseModel

class PersonCreate(BaseModel):
    name: str
    email: str | None = None
    avatar_url: str | None = None

class PersonOut(BaseModel):
    id: str
    name: str
    email: str | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
