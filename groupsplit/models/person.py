import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from groupsplit.db.session import Base

class Person(Base):
    __tablename__ = "persons"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=True)
    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
