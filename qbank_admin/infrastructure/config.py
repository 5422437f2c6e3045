import os
from dotenv import load_dotenv

load_dotenv()


def get_database_url() -> str:
    """Return the store connection string; startup cannot continue without it."""
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL environment variable is required")
    return url


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
    ).split(",")
    if origin.strip()
]

DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "500"))

# Type and internal-type names counted on the dashboard
VERBAL_TYPE_NAME = "لفظي"
QUANT_TYPE_NAME = "كمي"
READING_COMPREHENSION_NAME = "استيعاب المقروء"
VERBAL_ANALOGIES_NAME = "التناظر اللفظي"
SENTENCE_COMPLETION_NAME = "إكمال الجمل"
CONTEXTUAL_ERROR_NAME = "الخطأ السياقي"
