"""Model transport used by the repair orchestrator."""

from .provider import (
    PROVIDER_OPENROUTER,
    PROVIDER_PROXY,
    ProviderSettings,
    check_llm_available,
    get_ai_provider,
    get_provider_settings,
)
from .transport import OpenRouterChatTransport, TransportError

__all__ = [
    "PROVIDER_OPENROUTER",
    "PROVIDER_PROXY",
    "OpenRouterChatTransport",
    "ProviderSettings",
    "TransportError",
    "check_llm_available",
    "get_ai_provider",
    "get_provider_settings",
]
