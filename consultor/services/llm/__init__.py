"""Pacote de invocação de modelos

Principais módulos:
- base: interface BaseModelInvoker e ModelInvocationError
- openai_llm: OpenAI Responses API (saída estruturada, web/file search, functions)
- anthropic_llm: Anthropic Messages API
- dummy_llm: provedor offline para desenvolvimento e testes
- extraction: extração tolerante de texto de respostas
- factory: seleção do provedor pela configuração
"""

from .base import BaseModelInvoker, ModelInvocationError
from .extraction import ResponseShape, detect_shape, extract_text
from .factory import get_model_invoker

__all__ = [
    # Interface
    "BaseModelInvoker",
    "ModelInvocationError",
    # Extração de texto
    "ResponseShape",
    "detect_shape",
    "extract_text",
    # Factory
    "get_model_invoker",
]
