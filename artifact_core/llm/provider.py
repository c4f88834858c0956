"""
LLM Provider Configuration.

Resolves the chat-completions endpoint and headers from the environment
at request time (not import time) so the provider can be switched
between requests.

Supported providers:
- "openrouter" (default): OpenRouter API, requires OPENROUTER_API_KEY
- "proxy": an OpenAI-compatible proxy inside the cluster, no API key

Environment Variables:
    AI_PROVIDER: "openrouter" or "proxy" (default: "openrouter")
    ARTIFACT_PROXY_URL: Proxy base URL (default: DEFAULT_PROXY_URL)
    OPENROUTER_API_KEY: OpenRouter API key
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_PROXY_URL = "http://llm-proxy.nexus.svc.cluster.local:3100"
PROVIDER_OPENROUTER = "openrouter"
PROVIDER_PROXY = "proxy"


@dataclass
class ProviderSettings:
    """Endpoint and headers for one request."""
    provider: str
    chat_url: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def needs_auth(self) -> bool:
        return self.provider != PROVIDER_PROXY


def get_ai_provider() -> str:
    provider = os.environ.get("AI_PROVIDER", PROVIDER_OPENROUTER)
    if provider not in (PROVIDER_OPENROUTER, PROVIDER_PROXY):
        logger.warning(f"Unknown AI_PROVIDER={provider!r}, falling back to {PROVIDER_OPENROUTER}")
        return PROVIDER_OPENROUTER
    return provider


def get_provider_settings() -> ProviderSettings:
    """Resolve the current provider's chat URL and headers."""
    provider = get_ai_provider()
    headers = {"Content-Type": "application/json"}

    if provider == PROVIDER_PROXY:
        base = os.environ.get("ARTIFACT_PROXY_URL", DEFAULT_PROXY_URL).rstrip("/")
        return ProviderSettings(provider, f"{base}/v1/chat/completions", headers)

    api_key = os.environ.get("OPENROUTER_API_KEY", "")
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    headers["HTTP-Referer"] = "https://adverant.ai"
    headers["X-Title"] = "Nexus Artifact Pipeline"
    return ProviderSettings(provider, f"{OPENROUTER_BASE_URL}/chat/completions", headers)


def check_llm_available() -> bool:
    """True when the current provider has what it needs to authenticate."""
    if get_ai_provider() == PROVIDER_PROXY:
        return True
    return bool(os.environ.get("OPENROUTER_API_KEY"))
