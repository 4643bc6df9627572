import json
from typing import Callable, List

import fitz
import httpx
import pytest

from src.models.llm_client import make_client
from src.utils.io import SlideFile

API_KEY = "sk-test-0123456789"


def make_pdf(pages: List[str]) -> bytes:
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_textbox(fitz.Rect(72, 72, 540, 770), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


def chat_response(content: str, model: str = "gpt-4o") -> httpx.Response:
    return httpx.Response(200, json={
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": model,
        "choices": [{
            "index": 0,
            "message": {"role": "assistant", "content": content},
            "finish_reason": "stop",
        }],
    })


class MockOpenAI:
    """OpenAI SDK client wired to an in-process handler; records every request."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self._handler = handler

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self, api_key: str = API_KEY):
        return make_client(
            api_key,
            base_url="https://api.test/v1",
            http_client=httpx.Client(transport=httpx.MockTransport(self._handle)),
        )

    def bodies(self):
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def mock_openai():
    return MockOpenAI


@pytest.fixture
def pdf_file():
    def _make(name: str, pages: List[str]) -> SlideFile:
        return SlideFile(name=name, data=make_pdf(pages))
    return _make


@pytest.fixture
def api_key():
    return API_KEY
