# storerating/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Store Rating API"
    env: str = os.getenv("ENV", "dev")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # All REST routes are mounted under this prefix
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = _split_csv(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
        )
    )

    # Create tables on startup (handy for local dev; use Aerich migrations otherwise)
    generate_schemas: bool = os.getenv("GENERATE_SCHEMAS", "false").lower() in ("true", "1", "yes")

    # Default admin account created on first start (see core.bootstrap)
    admin_name: str = os.getenv("ADMIN_NAME", "System Administrator")
    admin_email: str = os.getenv("ADMIN_EMAIL", "admin@storerating.com")
    admin_password: str | None = os.getenv("ADMIN_PASSWORD")
    admin_address: str = os.getenv("ADMIN_ADDRESS", "123 Admin Street, Admin City")

settings = Settings()  # Instantiate configuration
