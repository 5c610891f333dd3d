"""Factory dos provedores de modelo"""

from consultor.settings import settings

from .anthropic_llm import AnthropicModelInvoker
from .base import BaseModelInvoker
from .dummy_llm import DummyModelInvoker
from .openai_llm import OpenAIModelInvoker


def get_model_invoker(provider: str | None = None) -> BaseModelInvoker:
    """Retorna o provedor de modelo conforme a configuração

    Args:
        provider: força um provedor (None usa settings.llm_provider)

    Returns:
        Instância de BaseModelInvoker
    """
    provider = provider or settings.llm_provider
    if provider == "openai":
        return OpenAIModelInvoker()
    elif provider == "anthropic":
        return AnthropicModelInvoker()
    elif provider == "dummy":
        return DummyModelInvoker()
    else:
        raise ValueError(f"Provedor de LLM não suportado: {provider}")
