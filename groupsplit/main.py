from contextlib import asynccontextmanager
from fastapi import FastAPI
from groupsplit.core.config import settings
from groupsplit.core.log_config import setup_logging
from groupsplit.db.session import create_tables
from groupsplit.api.v1.routes.system import router as system_router
from groupsplit.api.v1.routes.person import router as person_router
from groupsplit.api.v1.routes.group import router as group_router
from groupsplit.api.v1.routes.expense import router as expense_router
from groupsplit.api.v1.routes.balances import router as balances_router

setup_logging(settings.LOG_LEVEL)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES:
        await create_tables()
    yield

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

@app.get("/")
async def root():
    return {"message": "GroupSplit Backend is live"}

app.include_router(system_router, prefix="/api/v1/system")
app.include_router(person_router, prefix="/api/v1/persons")
app.include_router(group_router, prefix="/api/v1/groups")
app.include_router(expense_router, prefix="/api/v1/expenses")
app.include_router(balances_router, prefix="/api/v1/balances")
