from src.utils.config import MIN_PAGE_CHARS


# Near-empty pages (blank, image-only) are not worth an LLM call
def has_enough_text(text: str, min_chars: int = MIN_PAGE_CHARS) -> bool:
    return len((text or "").strip()) >= min_chars
