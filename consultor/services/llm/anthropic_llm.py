"""Implementação Anthropic (Messages API)"""

import json
import logging
from typing import Any

import anthropic
from anthropic import Anthropic
from pydantic import ValidationError

from consultor.models.agents import FunctionTool, ResponderConfig, RunResult, WebSearchTool
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

STRUCTURED_TOOL_NAME = "emitir_resposta"

# Orçamento de thinking por nível de esforço
THINKING_BUDGETS = {"minimal": 1024, "low": 2048, "medium": 4096, "high": 8192}


def turn_to_message(turn: Turn, responder_name: str) -> dict | None:
    """Converte um Turn em mensagem da Messages API

    Textos de outros agentes (ex.: a decisão do classificador) entram como
    contexto do lado do usuário, para que a conversa sempre termine em "user".
    """
    blocks: list[dict] = []
    role = "assistant" if turn.role == "assistant" else "user"
    foreign = turn.role == "assistant" and turn.author not in (None, responder_name)

    for block in turn.content:
        if isinstance(block, TextBlock):
            text = f"[{turn.author}] {block.value}" if foreign else block.value
            blocks.append({"type": "text", "text": text})
        elif isinstance(block, ToolCallBlock):
            blocks.append({
                "type": "tool_use",
                "id": block.call_id,
                "name": block.name,
                "input": json.loads(block.arguments or "{}"),
            })
        elif isinstance(block, ToolResultBlock):
            blocks.append({
                "type": "tool_result",
                "tool_use_id": block.call_id,
                "content": block.output,
            })

    if not blocks:
        return None
    if foreign and not turn.tool_calls:
        role = "user"
    return {"role": role, "content": blocks}


def history_to_messages(history: ConversationState, responder_name: str) -> list[dict]:
    """Converte o histórico juntando mensagens consecutivas do mesmo papel"""
    messages: list[dict] = []
    for turn in history:
        message = turn_to_message(turn, responder_name)
        if message is None:
            continue
        if messages and messages[-1]["role"] == message["role"]:
            messages[-1]["content"].extend(message["content"])
        else:
            messages.append(message)
    return messages


class AnthropicModelInvoker(BaseModelInvoker):
    """Serviço de modelo usando a Anthropic Messages API"""

    provider = "anthropic"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: Anthropic | None = None,
        timeout: float | None = None,
        max_tool_rounds: int | None = None,
    ):
        """Inicializa o cliente Anthropic

        Args:
            api_key: chave da API (None usa a variável de ambiente)
            model: modelo usado no lugar dos nomes de modelo OpenAI das configs
            client: cliente já construído (testes)
            timeout: timeout por chamada em segundos
            max_tool_rounds: limite de rodadas de function calling
        """
        self.api_key = api_key or settings.anthropic_api_key
        self.model = model or settings.anthropic_model
        self.timeout = timeout or settings.llm_timeout_seconds
        self.max_tool_rounds = max_tool_rounds or settings.llm_max_tool_rounds
        self.client = client or Anthropic(api_key=self.api_key, timeout=self.timeout)

    @property
    def default_model(self) -> str:
        return self.model

    def invoke(self, config: ResponderConfig, history: ConversationState) -> RunResult:
        """Executa o responder na Messages API

        Args:
            config: configuração do responder
            history: histórico da requisição

        Returns:
            RunResult com os turnos novos
        """
        if config.file_search is not None:
            raise ModelInvocationError(
                "busca em documentos (file search) não é suportada pela Anthropic",
                provider=self.provider,
                model=self.model,
            )

        messages = history_to_messages(history, config.name)
        request = self._build_request(config)
        new_turns: list[Turn] = []

        for _ in range(self.max_tool_rounds + 1):
            response = self._call(config, request, messages)
            if config.output_schema is not None:
                return self._finish_structured(config, response, new_turns)

            calls = [
                ToolCallBlock(call_id=b.id, name=b.name, arguments=json.dumps(b.input, ensure_ascii=False))
                for b in response.content
                if getattr(b, "type", None) == "tool_use"
            ]
            if not calls:
                return self._finish_text(config, response, new_turns)

            results = [self.run_function_call(config, call) for call in calls]
            new_turns.extend(self.tool_turns(calls, results, author=config.name))
            messages.append({"role": "assistant", "content": response.content})
            messages.append({
                "role": "user",
                "content": [
                    {"type": "tool_result", "tool_use_id": r.call_id, "content": r.output}
                    for r in results
                ],
            })

        raise ModelInvocationError(
            f"limite de {self.max_tool_rounds} rodadas de ferramentas excedido",
            provider=self.provider,
            model=self.model,
        )

    def _build_request(self, config: ResponderConfig) -> dict[str, Any]:
        params = config.settings
        request: dict[str, Any] = {
            "model": self.model,
            "max_tokens": params.max_output_tokens or 4096,
        }
        if config.instructions:
            request["system"] = config.instructions

        tools: list[dict] = []
        for tool in config.tools:
            if isinstance(tool, WebSearchTool):
                tools.append({
                    "type": "web_search_20250305",
                    "name": "web_search",
                    "max_uses": 5,
                    "allowed_domains": list(tool.allowed_domains),
                })
            elif isinstance(tool, FunctionTool):
                tools.append({
                    "name": tool.name,
                    "description": tool.description,
                    "input_schema": tool.parameters,
                })

        if config.output_schema is not None:
            # Saída estruturada via ferramenta obrigatória
            tools.append({
                "name": STRUCTURED_TOOL_NAME,
                "description": "Retorna a resposta no formato exigido.",
                "input_schema": config.output_schema.model_json_schema(),
            })
            request["tool_choice"] = {"type": "tool", "name": STRUCTURED_TOOL_NAME}
        if tools:
            request["tools"] = tools

        if params.is_reasoning and config.output_schema is None:
            budget = THINKING_BUDGETS.get(params.reasoning_effort, 2048)
            request["thinking"] = {"type": "enabled", "budget_tokens": budget}
            request["max_tokens"] = max(request["max_tokens"], budget + 2048)
        else:
            if params.temperature is not None:
                request["temperature"] = params.temperature
            elif params.top_p is not None:
                # A API não aceita temperature e top_p juntos em modelos recentes
                request["top_p"] = params.top_p
        return request

    def _call(self, config: ResponderConfig, request: dict, messages: list[dict]):
        try:
            return self.client.messages.create(messages=messages, **request)
        except anthropic.AnthropicError as e:
            raise ModelInvocationError(str(e), provider=self.provider, model=self.model) from e

    def _finish_structured(self, config: ResponderConfig, response, new_turns: list[Turn]) -> RunResult:
        block = next(
            (b for b in response.content
             if getattr(b, "type", None) == "tool_use" and b.name == STRUCTURED_TOOL_NAME),
            None,
        )
        if block is None:
            raise ModelInvocationError(
                "resposta sem saída estruturada", provider=self.provider, model=self.model
            )
        try:
            parsed = config.output_schema.model_validate(block.input)
        except ValidationError as e:
            raise ModelInvocationError(
                f"saída fora do schema: {e}", provider=self.provider, model=self.model
            ) from e

        text = parsed.model_dump_json()
        new_turns.append(Turn.assistant(text, author=config.name))
        return self._result(config, response, new_turns, text, parsed)

    def _finish_text(self, config: ResponderConfig, response, new_turns: list[Turn]) -> RunResult:
        text = "".join(
            b.text for b in response.content if getattr(b, "type", None) == "text"
        )
        if text:
            new_turns.append(Turn.assistant(text, author=config.name))
        return self._result(config, response, new_turns, text, None)

    def _result(self, config, response, new_turns, text, parsed) -> RunResult:
        usage = None
        if getattr(response, "usage", None) is not None:
            usage = {
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            }
        return RunResult(
            raw_output=response,
            new_turns=new_turns,
            output_text=text,
            parsed=parsed,
            route=config.route,
            model=getattr(response, "model", self.model),
            responder=config.name,
            usage=usage,
        )
