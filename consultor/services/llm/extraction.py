"""Extração de texto de respostas de modelo

Aceita os formatos de resposta conhecidos e devolve sempre uma string:

- PLAIN_TEXT: a própria resposta é uma string
- CONSOLIDATED_TEXT: objeto/dict com campo `output_text`
- NESTED_OUTPUT: objeto/dict com `output[0].content[0].text`
- EMPTY: None ou valor vazio
- UNKNOWN: qualquer outra coisa -> serialização truncada

Nunca lança exceção: falhas internas resultam em "".
"""

import json
import logging
import reprlib
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)

# Limite da serialização de fallback, em bytes UTF-8
DEFAULT_FALLBACK_LIMIT = 800

_MISSING = object()


class ResponseShape(Enum):
    """Formatos de resposta reconhecidos"""

    EMPTY = "empty"
    PLAIN_TEXT = "plain_text"
    CONSOLIDATED_TEXT = "consolidated_text"
    NESTED_OUTPUT = "nested_output"
    UNKNOWN = "unknown"


def _field(obj: Any, name: str) -> Any:
    """Lê um campo de dict ou atributo de objeto; ausente -> _MISSING"""
    if isinstance(obj, dict):
        return obj.get(name, _MISSING)
    return getattr(obj, name, _MISSING)


def _first(seq: Any) -> Any:
    if isinstance(seq, (list, tuple)) and seq:
        return seq[0]
    return _MISSING


def _nested_text(response: Any) -> Any:
    output = _field(response, "output")
    first_item = _first(output) if output is not _MISSING else _MISSING
    if first_item is _MISSING:
        return _MISSING
    content = _field(first_item, "content")
    first_block = _first(content) if content is not _MISSING else _MISSING
    if first_block is _MISSING:
        return _MISSING
    return _field(first_block, "text")


def detect_shape(response: Any) -> ResponseShape:
    """Identifica o formato da resposta"""
    if response is None or response == "" or response == {}:
        return ResponseShape.EMPTY
    if isinstance(response, str):
        return ResponseShape.PLAIN_TEXT
    consolidated = _field(response, "output_text")
    if consolidated is not _MISSING and consolidated:
        return ResponseShape.CONSOLIDATED_TEXT
    nested = _nested_text(response)
    if nested is not _MISSING and nested:
        return ResponseShape.NESTED_OUTPUT
    return ResponseShape.UNKNOWN


def truncate_bytes(text: str, limit: int) -> str:
    """Corta o texto em `limit` bytes UTF-8 sem quebrar caracteres"""
    return text.encode("utf-8")[:limit].decode("utf-8", errors="ignore")


def _serialize(response: Any, limit: int) -> str:
    try:
        text = json.dumps(response, ensure_ascii=False, default=str)
    except (TypeError, ValueError, RecursionError):
        # Estruturas circulares ou não serializáveis
        short = reprlib.Repr()
        short.maxstring = limit
        short.maxother = limit
        text = short.repr(response)
    return truncate_bytes(text, limit)


_CONVERTERS: dict[ResponseShape, Callable[[Any, int], str]] = {
    ResponseShape.EMPTY: lambda response, limit: "",
    ResponseShape.PLAIN_TEXT: lambda response, limit: response,
    ResponseShape.CONSOLIDATED_TEXT: lambda response, limit: str(_field(response, "output_text")),
    ResponseShape.NESTED_OUTPUT: lambda response, limit: str(_nested_text(response)),
    ResponseShape.UNKNOWN: _serialize,
}


def extract_text(response: Any, limit: int = DEFAULT_FALLBACK_LIMIT) -> str:
    """Melhor texto possível a partir de uma resposta de modelo

    Args:
        response: resposta em qualquer formato
        limit: limite em bytes da serialização de fallback

    Returns:
        Texto extraído ("" se nada puder ser extraído)
    """
    try:
        shape = detect_shape(response)
        return _CONVERTERS[shape](response, limit)
    except Exception as e:  # noqa: BLE001 - fronteira tolerante, nunca propaga
        logger.debug(f"falha ao extrair texto: {e}")
        return ""
