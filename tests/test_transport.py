"""Tests for the httpx chat transport and provider resolution."""

import asyncio
import json

import httpx
import pytest

from artifact_core.core import PipelineConfig
from artifact_core.llm import (
    OpenRouterChatTransport,
    TransportError,
    check_llm_available,
    get_provider_settings,
)


def make_transport(handler, **config_overrides):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    config = PipelineConfig(**config_overrides) if config_overrides else PipelineConfig()
    return OpenRouterChatTransport(config, client=client)


def chat_body(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture(autouse=True)
def openrouter_env(monkeypatch):
    monkeypatch.setenv("AI_PROVIDER", "openrouter")
    monkeypatch.setenv("OPENROUTER_API_KEY", "test-key")


class TestProviderSettings:

    def test_openrouter_headers(self):
        settings = get_provider_settings()
        assert settings.chat_url == "https://openrouter.ai/api/v1/chat/completions"
        assert settings.headers["Authorization"] == "Bearer test-key"
        assert settings.needs_auth

    def test_proxy_has_no_auth(self, monkeypatch):
        monkeypatch.setenv("AI_PROVIDER", "proxy")
        monkeypatch.setenv("ARTIFACT_PROXY_URL", "http://proxy:3100/")
        settings = get_provider_settings()
        assert settings.chat_url == "http://proxy:3100/v1/chat/completions"
        assert "Authorization" not in settings.headers
        assert check_llm_available()

    def test_unknown_provider_falls_back(self, monkeypatch):
        monkeypatch.setenv("AI_PROVIDER", "mystery")
        assert get_provider_settings().provider == "openrouter"

    def test_missing_key_not_available(self, monkeypatch):
        monkeypatch.delenv("OPENROUTER_API_KEY")
        assert not check_llm_available()


class TestSendChat:

    def test_returns_first_choice_content(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=chat_body('{"score": 1}'))

        transport = make_transport(handler, llm_model="test/model")
        messages = [{"role": "user", "content": "hi"}]
        assert asyncio.run(transport.send_chat(messages)) == '{"score": 1}'
        assert seen["body"]["model"] == "test/model"
        assert seen["body"]["messages"] == messages
        assert seen["auth"] == "Bearer test-key"

    def test_non_200_raises_with_status(self):
        transport = make_transport(lambda request: httpx.Response(503, text="overloaded"))
        with pytest.raises(TransportError) as exc_info:
            asyncio.run(transport.send_chat([]))
        assert exc_info.value.http_status == 503
        assert exc_info.value.response_body == "overloaded"
        assert exc_info.value.stage == "http_status"

    def test_bad_json_body(self):
        transport = make_transport(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(TransportError) as exc_info:
            asyncio.run(transport.send_chat([]))
        assert exc_info.value.stage == "response_json_decode"

    def test_unexpected_shape(self):
        transport = make_transport(lambda request: httpx.Response(200, json={"choices": []}))
        with pytest.raises(TransportError) as exc_info:
            asyncio.run(transport.send_chat([]))
        assert exc_info.value.stage == "response_shape"

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        transport = make_transport(handler)
        with pytest.raises(TransportError) as exc_info:
            asyncio.run(transport.send_chat([]))
        assert exc_info.value.stage == "http_request"

    def test_response_body_capped(self):
        transport = make_transport(lambda request: httpx.Response(500, text="e" * 5000))
        with pytest.raises(TransportError) as exc_info:
            asyncio.run(transport.send_chat([]))
        assert len(exc_info.value.response_body) == 2000
