
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Jointops API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Database (Postgres in production, SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./jointops.db",
        alias="DATABASE_URL",
    )

    # Currency amount that buys one basis unit of stock
    basis_unit_price: float = Field(default=6.0, alias="BASIS_UNIT_PRICE")

    # Dashboard windows
    recent_window: int = Field(
        default=5, alias="RECENT_WINDOW",
    )  # rows per stream folded into the dashboard balances
    activity_display_count: int = Field(default=6, alias="ACTIVITY_DISPLAY_COUNT")
    upcoming_horizon_days: int = Field(default=7, alias="UPCOMING_HORIZON_DAYS")

    # Seller PINs (bcrypt cost factor)
    pin_hash_rounds: int = Field(default=12, alias="PIN_HASH_ROUNDS")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
