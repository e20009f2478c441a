# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
DB_BUSY_TIMEOUT_SECONDS = int(os.getenv("DB_BUSY_TIMEOUT_SECONDS", 30))
TRANSACTION_MAX_ATTEMPTS = int(os.getenv("TRANSACTION_MAX_ATTEMPTS", 3))

ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "change-me-access")
ACCESS_TOKEN_EXPIRES_SECONDS = int(os.getenv("ACCESS_TOKEN_EXPIRES_SECONDS", 24*60*60))
REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", "change-me-refresh")
REFRESH_TOKEN_EXPIRES_SECONDS = int(os.getenv("REFRESH_TOKEN_EXPIRES_SECONDS", 30*24*60*60))

DEFAULT_AVATAR_URL = os.getenv("DEFAULT_AVATAR_URL", "/images/avatar/default.png")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
