from pydantic_settings import BaseSettings
from pydantic import ConfigDict

class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env")

    ENV: str = "development"

    DATABASE_URL: str = "sqlite:///./storefront.db"
    # "sql" or "memory"
    STORAGE_BACKEND: str = "sql"
    SEED_DEMO_DATA: bool = True

    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Checkout pricing
    FREE_SHIPPING_THRESHOLD: float = 50.00
    SHIPPING_FEE: float = 5.00
    ORDER_TOTAL_TOLERANCE: float = 0.01


settings = Settings()
