from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from groupsplit.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, future=True)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()

async def get_db():
    async with async_session() as session:
        yield session

async def create_tables():
    # importing the models registers them on Base.metadata
    import groupsplit.models.person  # noqa: F401
    import groupsplit.models.group  # noqa: F401
    import groupsplit.models.group_member  # noqa: F401
    import groupsplit.models.expense  # noqa: F401
    import groupsplit.models.expense_split  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
