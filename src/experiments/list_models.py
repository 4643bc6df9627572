import sys

from src.errors import SlideAnalyzerError
from src.models.llm_client import list_models
from src.utils.config import OPENAI_BASE_URL, get_api_key
from src.utils.credentials import load_api_key


def main() -> int:
    #parse args
    if len(sys.argv) > 1:
        api_key = sys.argv[1].strip()
    else:
        api_key = get_api_key() or load_api_key()

    try:
        models = list_models(api_key, base_url=OPENAI_BASE_URL)
    except SlideAnalyzerError as e:
        print(f"Failed to fetch OpenAI models: {e}")
        return 1

    print("\n===== AVAILABLE MODELS =====")
    for m in models:
        print(f"{m.id:<30} {m.name}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
