import httpx
import pytest

from src.errors import InvalidCredentialFormat, UpstreamError
from src.models.llm_client import LLMConfig, call_llm, display_name, is_well_formed_credential, list_models

from conftest import chat_response

MESSAGES = [
    {"role": "system", "content": "Classify the slide."},
    {"role": "user", "content": "Dosing overview for adults"},
]


def test_call_llm_posts_chat_completion(mock_openai, api_key):
    mock = mock_openai(lambda request: chat_response('{"title": "Dosing"}'))

    cfg = LLMConfig(model="gpt-4o", max_tokens=800, temperature=0.3)
    out = call_llm(api_key, MESSAGES, cfg, client=mock.client())

    assert out == '{"title": "Dosing"}'
    assert len(mock.requests) == 1

    request = mock.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/chat/completions"
    assert request.headers["Authorization"] == f"Bearer {api_key}"

    body = mock.bodies()[0]
    assert body["model"] == "gpt-4o"
    assert body["messages"] == MESSAGES
    assert body["temperature"] == 0.3
    assert body["max_tokens"] == 800


def test_call_llm_returns_empty_string_for_null_content(mock_openai, api_key):
    mock = mock_openai(lambda request: chat_response(None))
    assert call_llm(api_key, MESSAGES, LLMConfig(model="gpt-4o"), client=mock.client()) == ""


@pytest.mark.parametrize("bad_key", ["", "pk-123", "SK-abc", " sk-abc"])
def test_bad_credential_rejected_before_any_request(mock_openai, bad_key):
    mock = mock_openai(lambda request: chat_response("{}"))
    client = mock.client()

    with pytest.raises(InvalidCredentialFormat):
        call_llm(bad_key, MESSAGES, LLMConfig(model="gpt-4o"), client=client)

    with pytest.raises(InvalidCredentialFormat):
        list_models(bad_key, client=client)

    assert len(mock.requests) == 0


@pytest.mark.parametrize("key, expected", [
    ("sk-abc", True),
    ("sk-proj-123", True),
    ("", False),
    (None, False),
    ("bad-key", False),
])
def test_is_well_formed_credential(key, expected):
    assert is_well_formed_credential(key) is expected


def test_non_2xx_raises_upstream_error_with_body_message(mock_openai, api_key):
    mock = mock_openai(lambda request: httpx.Response(
        429, json={"error": {"message": "Rate limit reached", "type": "requests", "code": "rate_limit_exceeded"}},
    ))

    with pytest.raises(UpstreamError) as exc:
        call_llm(api_key, MESSAGES, LLMConfig(model="gpt-4o"), client=mock.client())

    assert exc.value.status == 429
    assert exc.value.message == "Rate limit reached"
    # no retries
    assert len(mock.requests) == 1


def test_connection_failure_raises_upstream_error(mock_openai, api_key):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    mock = mock_openai(handler)

    with pytest.raises(UpstreamError) as exc:
        call_llm(api_key, MESSAGES, LLMConfig(model="gpt-4o"), client=mock.client())

    assert exc.value.status is None


def test_list_models_filters_merges_and_sorts(mock_openai, api_key):
    catalog = ["gpt-4o", "gpt-4o-mini", "gpt-3.5-turbo-instruct", "gpt-4-vision-preview",
               "dall-e-3", "whisper-1", "text-embedding-3-large"]

    mock = mock_openai(lambda request: httpx.Response(200, json={
        "object": "list",
        "data": [{"id": i, "object": "model", "created": 0, "owned_by": "openai"} for i in catalog],
    }))

    models = list_models(api_key, client=mock.client())

    assert mock.requests[0].method == "GET"
    assert mock.requests[0].url.path == "/v1/models"
    assert [m.id for m in models] == ["gpt-3.5-turbo", "gpt-4", "gpt-4-turbo", "gpt-4o", "gpt-4o-mini"]

    names = {m.id: m.name for m in models}
    # allow-list names win over generated ones
    assert names["gpt-4o"] == "GPT-4o"
    assert names["gpt-4o-mini"] == "GPT 4o Mini"


def test_list_models_401_raises_upstream_error(mock_openai, api_key):
    mock = mock_openai(lambda request: httpx.Response(
        401, json={"error": {"message": "Incorrect API key provided", "type": "invalid_request_error",
                             "code": "invalid_api_key"}},
    ))

    with pytest.raises(UpstreamError) as exc:
        list_models(api_key, client=mock.client())

    assert exc.value.status == 401
    assert "Incorrect API key" in str(exc.value)


@pytest.mark.parametrize("model_id, expected", [
    ("gpt-4o-mini", "GPT 4o Mini"),
    ("gpt-3.5-turbo-16k", "GPT 3.5 Turbo 16k"),
    ("gpt-4-0613", "GPT 4 0613"),
])
def test_display_name(model_id, expected):
    assert display_name(model_id) == expected
