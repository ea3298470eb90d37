from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Stock Ledger"
    DATABASE_URL: str = "sqlite:///./stockledger.db"
    SQL_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    # uvicorn bind address for the stockledger command
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Page size for GET /inventory when no limit is given
    DEFAULT_PAGE_LIMIT: int = 10

    model_config = {"env_file": ".env"}


settings = Settings()
