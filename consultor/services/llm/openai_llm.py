"""Implementação OpenAI (Responses API)"""

import logging
from typing import Any

import openai
from openai import OpenAI
from pydantic import ValidationError

from consultor.models.agents import (
    FileSearchTool,
    FunctionTool,
    ResponderConfig,
    RunResult,
    WebSearchTool,
)
from consultor.models.conversation import (
    ConversationState,
    TextBlock,
    ToolCallBlock,
    ToolResultBlock,
    Turn,
)
from consultor.settings import settings

from .base import BaseModelInvoker, ModelInvocationError

logger = logging.getLogger(__name__)


def turn_to_input_items(turn: Turn) -> list[dict]:
    """Converte um Turn em itens de input da Responses API"""
    items = []
    texts = [b.value for b in turn.content if isinstance(b, TextBlock)]
    if texts:
        if turn.role == "user":
            items.append({
                "role": "user",
                "content": [{"type": "input_text", "text": t} for t in texts],
            })
        else:
            items.append({"role": "assistant", "content": "".join(texts)})

    for block in turn.content:
        if isinstance(block, ToolCallBlock):
            items.append({
                "type": "function_call",
                "call_id": block.call_id,
                "name": block.name,
                "arguments": block.arguments,
            })
        elif isinstance(block, ToolResultBlock):
            items.append({
                "type": "function_call_output",
                "call_id": block.call_id,
                "output": block.output,
            })
    return items


def tool_to_param(tool) -> dict:
    """Converte a especificação de ferramenta no formato da Responses API"""
    if isinstance(tool, WebSearchTool):
        return {
            "type": "web_search",
            "search_context_size": tool.search_context_size,
            "user_location": {"type": "approximate"},
            "filters": {"allowed_domains": list(tool.allowed_domains)},
        }
    if isinstance(tool, FileSearchTool):
        return {"type": "file_search", "vector_store_ids": list(tool.vector_store_ids)}
    if isinstance(tool, FunctionTool):
        return {
            "type": "function",
            "name": tool.name,
            "description": tool.description,
            "parameters": tool.parameters,
            "strict": False,
        }
    raise TypeError(f"ferramenta não suportada: {type(tool).__name__}")


class OpenAIModelInvoker(BaseModelInvoker):
    """Serviço de modelo usando a OpenAI Responses API"""

    provider = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        client: OpenAI | None = None,
        timeout: float | None = None,
        max_tool_rounds: int | None = None,
    ):
        """Inicializa o cliente OpenAI

        Args:
            api_key: chave da API (None usa a variável de ambiente)
            client: cliente já construído (testes)
            timeout: timeout por chamada em segundos
            max_tool_rounds: limite de rodadas de function calling
        """
        self.api_key = api_key or settings.openai_api_key
        self.timeout = timeout or settings.llm_timeout_seconds
        self.max_tool_rounds = max_tool_rounds or settings.llm_max_tool_rounds
        self.client = client or OpenAI(api_key=self.api_key, timeout=self.timeout)

    @property
    def default_model(self) -> str:
        return settings.openai_model_responder

    def invoke(self, config: ResponderConfig, history: ConversationState) -> RunResult:
        """Executa o responder na Responses API

        Args:
            config: configuração do responder
            history: histórico da requisição

        Returns:
            RunResult com os turnos novos (rodadas de ferramenta + resposta final)
        """
        input_items = [item for turn in history for item in turn_to_input_items(turn)]
        request = self._build_request(config)
        new_turns: list[Turn] = []

        # Loop de function calling: termina quando o modelo não pede mais ferramentas
        for _ in range(self.max_tool_rounds + 1):
            response = self._call(config, request, input_items)
            calls = self._function_calls(response)
            if not calls:
                return self._finish(config, response, new_turns)

            results = [self.run_function_call(config, call) for call in calls]
            round_turns = self.tool_turns(calls, results, author=config.name)
            new_turns.extend(round_turns)
            for turn in round_turns:
                input_items.extend(turn_to_input_items(turn))

        raise ModelInvocationError(
            f"limite de {self.max_tool_rounds} rodadas de ferramentas excedido",
            provider=self.provider,
            model=config.model,
        )

    def _build_request(self, config: ResponderConfig) -> dict[str, Any]:
        """Monta os parâmetros fixos da chamada"""
        params = config.settings
        request: dict[str, Any] = {
            "model": config.model,
            "instructions": config.instructions or None,
            "store": params.store,
        }
        if config.tools:
            request["tools"] = [tool_to_param(t) for t in config.tools]
        if params.max_output_tokens is not None:
            request["max_output_tokens"] = params.max_output_tokens

        # Modelos de raciocínio não aceitam temperature/top_p
        if params.is_reasoning:
            request["reasoning"] = {"effort": params.reasoning_effort}
        else:
            if params.temperature is not None:
                request["temperature"] = params.temperature
            if params.top_p is not None:
                request["top_p"] = params.top_p
        return {k: v for k, v in request.items() if v is not None}

    def _call(self, config: ResponderConfig, request: dict, input_items: list[dict]):
        try:
            if config.output_schema is not None:
                return self.client.responses.parse(
                    input=input_items, text_format=config.output_schema, **request
                )
            return self.client.responses.create(input=input_items, **request)
        except (openai.OpenAIError, ValidationError) as e:
            raise ModelInvocationError(str(e), provider=self.provider, model=config.model) from e

    @staticmethod
    def _function_calls(response) -> list[ToolCallBlock]:
        calls = []
        for item in getattr(response, "output", None) or []:
            if getattr(item, "type", None) == "function_call":
                calls.append(ToolCallBlock(
                    call_id=item.call_id,
                    name=item.name,
                    arguments=item.arguments or "{}",
                ))
        return calls

    def _finish(self, config: ResponderConfig, response, new_turns: list[Turn]) -> RunResult:
        """Converte a resposta final em RunResult"""
        text = getattr(response, "output_text", "") or ""
        parsed = None
        if config.output_schema is not None:
            parsed = getattr(response, "output_parsed", None)
            if parsed is None:
                raise ModelInvocationError(
                    "resposta sem saída estruturada (recusa ou formato inválido)",
                    provider=self.provider,
                    model=config.model,
                )
            if not text:
                text = parsed.model_dump_json()

        if text:
            new_turns.append(Turn.assistant(text, author=config.name))

        usage = None
        if getattr(response, "usage", None) is not None:
            usage = {
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        return RunResult(
            raw_output=response,
            new_turns=new_turns,
            output_text=text,
            parsed=parsed,
            route=config.route,
            model=getattr(response, "model", config.model),
            responder=config.name,
            usage=usage,
        )
