from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from groupsplit.db.session import Base

class GroupMember(Base):
    __tablename__ = "group_members"
    __table_args__ = (UniqueConstraint("group_id", "person_id", name="uq_group_person"),)

    # autoincrement id keeps members in the order they joined
    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(String(36), ForeignKey("groups.id"), nullable=False)
    person_id = Column(String(36), ForeignKey("persons.id"), nullable=False)

    group = relationship("Group", back_populates="members")
    person = relationship("Person")
