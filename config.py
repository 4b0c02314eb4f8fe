"""
Environment configuration for the Ray Unity backend.

Values come from the process environment, optionally seeded from a local
.env file. Import the constants directly:

     from config import DATABASE_URL, JWT_SECRET
"""
import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load .env
load_dotenv()


def _flag(name: str, default: str) -> bool:
     return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Database
DB_SERVER = os.getenv("DB_SERVER")
DB_PORT = os.getenv("DB_PORT", "1433")
DB_USER = os.getenv("DB_USER")
DB_PASS = os.getenv("DB_PASS")
DB_NAME = os.getenv("DB_NAME")

# Azure SQL (MS SQL Server) via pymssql unless DATABASE_URL overrides it
DATABASE_URL = os.getenv("DATABASE_URL") or (
     f"mssql+pymssql://{quote_plus(DB_USER or '')}:{quote_plus(DB_PASS or '')}"
     f"@{DB_SERVER}:{DB_PORT}/{DB_NAME}"
)
SQL_ECHO = _flag("SQL_ECHO", "false")

# Auth
JWT_SECRET = os.getenv("JWT_SECRET") or os.urandom(32).hex()
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

# Email confirmation (Brevo)
BREVO_API_KEY = os.getenv("BREVO_API_KEY")
EMAIL_SENDER = os.getenv("EMAIL_SENDER", "noreply@rayunity.in")
EMAIL_CONFIRMATION_REQUIRED = _flag("EMAIL_CONFIRMATION_REQUIRED", "true")
OTP_TTL_MINUTES = int(os.getenv("OTP_TTL_MINUTES", "10"))

# HTTP
CORS_ORIGINS = [origin for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin]
PORT = int(os.getenv("PORT", "10000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv(
     "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_FILE = os.getenv("LOG_FILE")
