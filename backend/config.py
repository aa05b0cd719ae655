import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')


class Settings:
    """Runtime configuration read from the environment (and an optional .env)."""

    def __init__(self):
        self.mongo_url = os.getenv("MONGO_URL", "mongodb://localhost:27017")
        self.db_name = os.getenv("DB_NAME", "blood_donation")
        self.jwt_secret = os.getenv("JWT_SECRET", "dev-secret")
        self.jwt_algorithm = "HS256"
        self.jwt_expires_hours = int(os.getenv("JWT_EXPIRES_HOURS", "24"))
        self.bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", "10"))
        self.admin_email = os.getenv("ADMIN_EMAIL")
        self.admin_pass = os.getenv("ADMIN_PASS")
        self.admin_name = os.getenv("ADMIN_NAME", "Administrator")
        self.cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
        self.port = int(os.getenv("PORT", "4000"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
