from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "RIMS"
    LOG_LEVEL: str = "INFO"

    # Durable key-value storage (one file per key)
    STORAGE_DIR: str = "./data"
    DB_STORAGE_KEY: str = "rims_sqlite_db"

    LOW_STOCK_THRESHOLD: int = 5

    # Vendor price lookups older than this are stale
    VENDOR_CACHE_MAX_AGE_SECONDS: int = 15 * 60

    EMAIL_VERIFICATION_TOKEN_HOURS: int = 24

    # Insert the demo accounts/items when the store starts empty
    SEED_DEMO_DATA: bool = True

    model_config = {"env_file": ".env"}


settings = Settings()
