"""Classificador de rotas (RouteClassifier)

Escolhe exatamente uma RouteIdentifier para a conversa usando saída
estruturada (schema RouteDecision). Não há fallback por palavra-chave:
qualquer falha vira ClassificationFailure e a decisão fica com o chamador.
"""

import logging
from typing import TYPE_CHECKING

from consultor.models.agents import (
    ModelSettings,
    ResponderConfig,
    RouteDecision,
    RouteIdentifier,
)
from consultor.models.conversation import ConversationState
from consultor.prompts import ROUTE_CLASSIFICATION_PROMPT
from consultor.settings import settings
from consultor.services.llm.base import ModelInvocationError

from .errors import ClassificationFailure

if TYPE_CHECKING:
    from consultor.services.llm.base import BaseModelInvoker

logger = logging.getLogger(__name__)


def build_classifier_config(model: str | None = None) -> ResponderConfig:
    """Configuração do classificador ("Consultor")"""
    return ResponderConfig(
        name="Consultor",
        model=model or settings.openai_model_classifier,
        instructions=ROUTE_CLASSIFICATION_PROMPT,
        output_schema=RouteDecision,
        settings=ModelSettings(temperature=1.0, top_p=1.0, max_output_tokens=2048),
    )


class RouteClassifier:
    """Classificador de rotas baseado em LLM"""

    def __init__(self, invoker: "BaseModelInvoker", config: ResponderConfig | None = None):
        """
        Args:
            invoker: provedor de modelo
            config: configuração do classificador (None usa a padrão)
        """
        self.invoker = invoker
        self.config = config or build_classifier_config()
        if self.config.output_schema is None:
            raise ValueError("o classificador exige output_schema")

    @property
    def routes(self) -> frozenset[RouteIdentifier]:
        """Domínio de saída do classificador"""
        return frozenset(RouteIdentifier)

    def classify(self, history: ConversationState) -> RouteIdentifier:
        """Classifica a conversa

        Os turnos do classificador (incluindo a saída estruturada) são
        anexados ao histórico antes de retornar.

        Args:
            history: histórico da requisição

        Returns:
            RouteIdentifier escolhida

        Raises:
            ClassificationFailure: erro/timeout do modelo ou saída fora do schema
        """
        try:
            result = self.invoker.invoke(self.config, history)
        except ModelInvocationError as e:
            raise ClassificationFailure("falha na chamada do classificador", cause=e) from e
        except Exception as e:  # noqa: BLE001 - erro inesperado do provedor vira falha tipada
            logger.exception("erro inesperado no classificador")
            raise ClassificationFailure("erro inesperado no classificador", cause=e) from e

        route = self._parse(result.parsed)
        history.extend(result.new_turns)
        logger.info(f"rota classificada: {route.value} (modelo={result.model})")
        return route

    def _parse(self, parsed) -> RouteIdentifier:
        """Extrai a rota do valor estruturado"""
        if isinstance(parsed, RouteDecision):
            return parsed.route
        try:
            return RouteDecision.model_validate(parsed).route
        except ValueError as e:
            raise ClassificationFailure(
                f"saída do classificador fora da enumeração: {parsed!r}", cause=e
            ) from e
