from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging
import re

import httpx
from openai import OpenAI, APIConnectionError, APIStatusError

from src.errors import InvalidCredentialFormat, UpstreamError

logger = logging.getLogger(__name__)

CREDENTIAL_PREFIX = "sk-"

# Always offered in the model picker, even if the catalog omits them
PREFERRED_MODELS = [
    {"id": "gpt-4o", "name": "GPT-4o"},
    {"id": "gpt-4-turbo", "name": "GPT-4 Turbo"},
    {"id": "gpt-4", "name": "GPT-4"},
    {"id": "gpt-3.5-turbo", "name": "GPT-3.5 Turbo"},
]


@dataclass
class LLMConfig:
    model: str
    max_tokens: int = 800
    temperature: float | None = None
    base_url: str | None = None


@dataclass(frozen=True)
class ModelDescriptor:
    id: str
    name: str


def is_well_formed_credential(api_key: Optional[str]) -> bool:
    return bool(api_key) and api_key.startswith(CREDENTIAL_PREFIX)


def check_credential(api_key: str) -> None:
    if not is_well_formed_credential(api_key):
        raise InvalidCredentialFormat()


def make_client(
    api_key: str,
    base_url: Optional[str] = None,
    http_client: Optional[httpx.Client] = None,
) -> OpenAI:
    # One blind call per page: the SDK's own retries are switched off
    kwargs: Dict[str, Any] = {"api_key": api_key, "max_retries": 0}
    if base_url:
        kwargs["base_url"] = base_url
    if http_client is not None:
        kwargs["http_client"] = http_client
    return OpenAI(**kwargs)


def _upstream_error(exc: Exception) -> UpstreamError:
    if isinstance(exc, APIStatusError):
        body = exc.body
        message = None
        if isinstance(body, dict):
            message = body.get("message")
        return UpstreamError(exc.status_code, message or exc.message)
    return UpstreamError(None, str(exc))


def call_llm(
    api_key: str,
    messages: List[Dict[str, str]],
    cfg: LLMConfig,
    client: Optional[OpenAI] = None,
) -> str:
    """Send one chat completion and return the assistant text."""

    check_credential(api_key)

    if client is None:
        client = make_client(api_key, base_url=cfg.base_url)

    request: Dict[str, Any] = {
        "model": cfg.model,
        "messages": messages,
        "max_tokens": cfg.max_tokens,
    }

    if cfg.temperature is not None:
        request["temperature"] = cfg.temperature

    try:
        response = client.chat.completions.create(**request)
    except (APIStatusError, APIConnectionError) as e:
        raise _upstream_error(e) from e

    return response.choices[0].message.content or ""


def display_name(model_id: str) -> str:
    name = model_id.replace("gpt-", "GPT ").replace("-", " ")
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), name)


def _is_chat_model(model_id: str) -> bool:
    return "gpt" in model_id and "instruct" not in model_id and "vision" not in model_id


def list_models(
    api_key: str,
    client: Optional[OpenAI] = None,
    base_url: Optional[str] = None,
) -> List[ModelDescriptor]:
    """Chat-capable GPT models from the catalog plus the preferred list, sorted by id."""

    check_credential(api_key)

    if client is None:
        client = make_client(api_key, base_url=base_url)

    try:
        catalog = [m.id for m in client.models.list()]
    except (APIStatusError, APIConnectionError) as e:
        raise _upstream_error(e) from e

    models: Dict[str, ModelDescriptor] = {
        m["id"]: ModelDescriptor(id=m["id"], name=m["name"]) for m in PREFERRED_MODELS
    }

    for model_id in catalog:
        if _is_chat_model(model_id) and model_id not in models:
            models[model_id] = ModelDescriptor(id=model_id, name=display_name(model_id))

    logger.debug("Model catalog: %d entries, %d offered", len(catalog), len(models))

    return sorted(models.values(), key=lambda m: m.id)
