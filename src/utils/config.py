import os
from dotenv import load_dotenv

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
ENV_PATH = os.path.join(ROOT_DIR, ".env")

load_dotenv(ENV_PATH)


DEFAULT_MODEL = os.getenv("SLIDE_ANALYZER_MODEL", "gpt-4o")
DEFAULT_VARIANT = os.getenv("SLIDE_ANALYZER_VARIANT", "medical_affairs")
LOG_LEVEL = os.getenv("SLIDE_ANALYZER_LOG_LEVEL", "INFO")

# Optional proxy / compatible endpoint
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL") or None

# Where the API key is remembered between sessions
CREDENTIALS_PATH = os.getenv("SLIDE_ANALYZER_ENV_FILE", ENV_PATH)

# Pages with less trimmed text than this are skipped
MIN_PAGE_CHARS = 20


def get_api_key() -> str:
    return os.getenv("OPENAI_API_KEY", "")
