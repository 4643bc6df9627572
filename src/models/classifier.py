from typing import Optional, Union

from openai import OpenAI

from src.models.llm_client import LLMConfig, call_llm
from src.models.prompts import build_messages
from src.models.validator import validate
from src.models.variants import Analysis, Variant, get_variant


# Generation parameters are fixed per variant
def variant_config(model: str, variant: Union[str, Variant], base_url: Optional[str] = None) -> LLMConfig:
    variant = get_variant(variant)
    return LLMConfig(
        model=model,
        max_tokens=variant.max_tokens,
        temperature=variant.temperature,
        base_url=base_url,
    )


# Build prompt -> one completion -> validated analysis
def classify_page(
    page_text: str,
    api_key: str,
    model: str,
    variant: Union[str, Variant],
    client: Optional[OpenAI] = None,
    base_url: Optional[str] = None,
) -> Analysis:

    variant = get_variant(variant)
    messages = build_messages(page_text, variant.name)

    raw = call_llm(
        api_key=api_key,
        messages=messages,
        cfg=variant_config(model, variant, base_url),
        client=client,
    )

    return validate(raw, variant)
