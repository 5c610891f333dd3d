"""Interface base de invocação de modelos"""

import json
import logging
from abc import ABC, abstractmethod

from consultor.models.agents import ModelSettings, ResponderConfig, RunResult
from consultor.models.conversation import (
    ConversationState,
    ToolCallBlock,
    ToolResultBlock,
    Turn,
)

logger = logging.getLogger(__name__)


class ModelInvocationError(RuntimeError):
    """Falha ao invocar o modelo (rede, timeout, rate limit, saída inválida...)"""

    def __init__(self, message: str, provider: str | None = None, model: str | None = None):
        super().__init__(message)
        self.provider = provider
        self.model = model

    def __str__(self) -> str:
        where = "/".join(p for p in (self.provider, self.model) if p)
        base = super().__str__()
        return f"[{where}] {base}" if where else base


class BaseModelInvoker(ABC):
    """Classe abstrata base dos provedores de modelo"""

    provider: str = "base"

    @abstractmethod
    def invoke(self, config: ResponderConfig, history: ConversationState) -> RunResult:
        """Executa o modelo de `config` sobre o histórico

        Args:
            config: configuração do responder (modelo, instruções, ferramentas)
            history: histórico da requisição (não é alterado aqui)

        Returns:
            RunResult com a saída bruta, os novos turnos e, se houver
            output_schema, o valor já validado em `parsed`

        Raises:
            ModelInvocationError: qualquer falha de invocação
        """
        pass

    def chat(self, user_message: str, instructions: str = "", model: str | None = None) -> str:
        """Interface simples de chat (sem ferramentas, sem schema)

        Args:
            user_message: mensagem do usuário
            instructions: instruções de sistema (opcional)
            model: modelo (None usa o padrão do provedor)

        Returns:
            Texto da resposta
        """
        config = ResponderConfig(
            name="chat",
            model=model or self.default_model,
            instructions=instructions,
            settings=ModelSettings(),
        )
        result = self.invoke(config, ConversationState.seeded(user_message))
        return result.output_text

    @property
    def default_model(self) -> str:
        return "default"

    # -------------------------------------------------------------------------
    # Ferramentas locais (function calling)
    # -------------------------------------------------------------------------

    def run_function_call(self, config: ResponderConfig, call: ToolCallBlock) -> ToolResultBlock:
        """Executa uma função local pedida pelo modelo

        Erros de argumento ou da própria função voltam para o modelo como
        saída da ferramenta, para que ele possa se corrigir.
        """
        tool = config.functions.get(call.name)
        if tool is None:
            raise ModelInvocationError(
                f"modelo chamou ferramenta desconhecida: {call.name}",
                provider=self.provider,
                model=config.model,
            )
        try:
            arguments = json.loads(call.arguments or "{}")
            if not isinstance(arguments, dict):
                raise TypeError(f"argumentos devem ser um objeto JSON, recebido {type(arguments).__name__}")
            output = tool.call(arguments)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"ferramenta {call.name} falhou: {e}")
            output = {"erro": str(e)}
        if not isinstance(output, str):
            output = json.dumps(output, ensure_ascii=False, default=str)
        return ToolResultBlock(call_id=call.call_id, output=output)

    @staticmethod
    def tool_turns(calls: list[ToolCallBlock], results: list[ToolResultBlock], author: str) -> list[Turn]:
        """Turnos que registram uma rodada de ferramentas no histórico"""
        return [
            Turn(role="assistant", content=tuple(calls), author=author),
            Turn(role="tool", content=tuple(results), author=author),
        ]
