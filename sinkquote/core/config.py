# sinkquote/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()

# -----------------------
# Database Config
# -----------------------
DB_TYPE = os.getenv("DB_TYPE", "sqlite").lower()

if DB_TYPE == "postgres":
    DATABASE_URL = os.getenv("DATABASE_URL")
    if not DATABASE_URL:
        raise ValueError("DATABASE_URL is required for Postgres setup")
elif DB_TYPE == "sqlite":
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./sinkquote.db")
else:
    raise ValueError(f"Unsupported DB_TYPE: {DB_TYPE}")

# -----------------------
# JWT Config
# -----------------------
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    raise ValueError("JWT_SECRET environment variable must be set")

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# -----------------------
# Matching Config (inches)
# -----------------------
# Cast iron removal and apron-front installs share a 30" default but are tuned separately.
CAST_IRON_MIN_CABINET_WIDTH = float(os.getenv("CAST_IRON_MIN_CABINET_WIDTH", "30"))
APRON_FRONT_MIN_CABINET_WIDTH = float(os.getenv("APRON_FRONT_MIN_CABINET_WIDTH", "30"))
MAX_CUT_AND_POLISH_THICKNESS = float(os.getenv("MAX_CUT_AND_POLISH_THICKNESS", "2.25"))
MIN_CUT_AND_POLISH_CLEARANCE = float(os.getenv("MIN_CUT_AND_POLISH_CLEARANCE", "2"))
BOWL_SWAP_TOLERANCE = float(os.getenv("BOWL_SWAP_TOLERANCE", "1"))
CANDIDATE_DIMENSION_MARGIN = float(os.getenv("CANDIDATE_DIMENSION_MARGIN", "6"))

DEFAULT_MATCH_LIMIT = 10
MAX_MATCH_LIMIT = 50

# -----------------------
# Quote Config
# -----------------------
QUOTE_EXPIRATION_DAYS = int(os.getenv("QUOTE_EXPIRATION_DAYS", "14"))
QUOTE_NUMBER_ATTEMPTS = 10
