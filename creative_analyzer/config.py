import os
from dotenv import load_dotenv

load_dotenv()

# API Keys and Config - loaded from .env
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# Local key/value store (one JSON file per key)
STORE_PATH = os.getenv("STORE_PATH", ".creative_analyzer/store")

# Cache and history limits
CACHE_TTL_HOURS = 48
HISTORY_LIMIT = 100
CONTEXT_LIMIT = 15
TOP_CREATIVES_LIMIT = 6

# Creatives wider than this width/height ratio are treated as square
SQUARE_RATIO_THRESHOLD = 0.9

# Simulated database connection (no real network target)
DB_HOST = os.getenv("DB_HOST", "")
DB_PORT = os.getenv("DB_PORT", "")
DB_USER = os.getenv("DB_USER", "")
DB_PASS = os.getenv("DB_PASS", "")
DB_NAME = os.getenv("DB_NAME", "")
