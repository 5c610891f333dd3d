"""Orquestrador do fluxo (Workflow)

classificar -> rotear -> responder, com um histórico novo por requisição.

Sem retries nesta camada: ClassificationFailure, UnknownRoute e
ResponderFailure sobem para o chamador, que decide o texto ao usuário.
"""

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from consultor.models.agents import RunResult
from consultor.models.conversation import ConversationState, Turn
from consultor.services.llm.extraction import extract_text

from .errors import OrchestrationError, UnknownRoute
from .intent_classifier import RouteClassifier
from .responders import build_responders
from .router import Router

if TYPE_CHECKING:
    from consultor.services.llm.base import BaseModelInvoker

logger = logging.getLogger(__name__)


class Workflow:
    """Pipeline de uma mensagem recebida"""

    def __init__(self, classifier: RouteClassifier, router: Router):
        """
        Args:
            classifier: classificador de rotas
            router: tabela rota -> responder (já validada)
        """
        self.classifier = classifier
        self.router = router

    @classmethod
    def from_settings(cls, invoker: Optional["BaseModelInvoker"] = None) -> "Workflow":
        """Monta classificador, responders e roteador a partir da configuração

        Args:
            invoker: provedor de modelo (None usa get_model_invoker())

        Raises:
            RouterConfigurationError: tabela de rotas inconsistente
        """
        if invoker is None:
            from consultor.services.llm.factory import get_model_invoker

            invoker = get_model_invoker()

        classifier = RouteClassifier(invoker)
        router = Router(build_responders(invoker), classifier_routes=classifier.routes)
        return cls(classifier, router)

    def execute(self, user_text: str, history: Optional[Sequence[Turn]] = None) -> RunResult:
        """Processa uma mensagem do usuário

        Args:
            user_text: texto recebido
            history: turnos anteriores opcionais (memória carregada pelo chamador)

        Returns:
            RunResult do responder escolhido, com output_text já normalizado

        Raises:
            ClassificationFailure, UnknownRoute, ResponderFailure
        """
        # 1. Histórico novo com o turno do usuário
        state = ConversationState.seeded(user_text, history)

        # 2. Classificação (anexa os turnos do classificador)
        route = self.classifier.classify(state)

        # 3. Roteamento
        try:
            responder = self.router.route(route)
        except UnknownRoute:
            logger.error(f"rota sem responder (erro de configuração): {route.value}")
            raise

        # 4. Resposta
        logger.info(f"responder selecionado: {responder.name} (rota={route.value})")
        try:
            result = responder.run(state)
        except OrchestrationError as e:
            logger.warning(f"responder falhou: {e}")
            raise

        # 5. Texto final normalizado
        result.output_text = extract_text(result.output_text)
        result.route = route
        return result

    def get_route_info(self) -> dict:
        """Modelos e responders configurados (debug/log)"""
        return {
            "classifier_model": self.classifier.config.model,
            "routes": self.router.get_route_info(),
        }
