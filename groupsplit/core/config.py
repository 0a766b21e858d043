from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "GroupSplit Backend"
    DATABASE_URL: str = "sqlite+aiosqlite:///./groupsplit.db"
    LOG_LEVEL: str = "INFO"

    # dev convenience, production goes through alembic
    CREATE_TABLES: bool = False


settings = Settings()
