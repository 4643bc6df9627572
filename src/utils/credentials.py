import logging
import os

from dotenv import get_key, set_key

from src.utils.config import CREDENTIALS_PATH

logger = logging.getLogger(__name__)

CREDENTIAL_KEY = "OPENAI_API_KEY"


# Remembered key, or "" when nothing stored yet
def load_api_key(path: str = CREDENTIALS_PATH) -> str:
    if not os.path.exists(path):
        return ""
    return get_key(path, CREDENTIAL_KEY) or ""


def save_api_key(api_key: str, path: str = CREDENTIALS_PATH) -> None:
    if not os.path.exists(path):
        open(path, "a", encoding="utf-8").close()
    set_key(path, CREDENTIAL_KEY, api_key)
    logger.info("Stored API key in %s", path)
