# app/core/config.py
from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - SUPABASE_SERVICE_ROLE_KEY (backend store client; requests fail without it)
      - pricing / checkout knobs below
    """

    PROJECT_NAME: str = "Farmers Market Storefront"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Supabase config
    SUPABASE_URL: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Pricing: flat delivery fee and flat tax rate
    DELIVERY_FEE: Decimal = Decimal("5.00")
    TAX_RATE: Decimal = Decimal("0.08")

    # Checkout behaviour
    # subtotal    -> persisted order total excludes delivery fee and tax
    # grand_total -> persisted order total = subtotal + delivery fee + tax
    ORDER_TOTAL_POLICY: Literal["subtotal", "grand_total"] = "subtotal"
    REQUIRE_DELIVERY_ADDRESS: bool = False
    COMPENSATE_FAILED_ORDERS: bool = True

    # Table holding full_name / phone / address for delivery info
    PROFILE_TABLE: str = "profiles"

    CORS_ORIGINS: list[str] = [
        "http://localhost:8081",
        "http://localhost:19006",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
