"""Camada de orquestração

Pipeline classificação de rota -> roteamento -> resposta.

Componentes:
- RouteClassifier: escolhe uma rota com saída estruturada (gpt-4.1-mini)
- Router: tabela rota -> Responder validada na inicialização
- Responder: um agente por rota (instruções, modelo, ferramentas próprias)
- Workflow: executa o pipeline para uma mensagem, com histórico próprio
"""

from consultor.models.agents import InteractionRecord, RouteDecision, RouteIdentifier, RunResult

from .errors import (
    ClassificationFailure,
    OrchestrationError,
    ResponderFailure,
    RouterConfigurationError,
    UnknownRoute,
)
from .intent_classifier import RouteClassifier, build_classifier_config
from .lead_record import LeadRecord
from .responders import Responder, build_responder_configs, build_responders
from .router import Router
from .workflow import Workflow

__all__ = [
    "RouteIdentifier",
    "RouteDecision",
    "RunResult",
    "InteractionRecord",
    "OrchestrationError",
    "ClassificationFailure",
    "UnknownRoute",
    "ResponderFailure",
    "RouterConfigurationError",
    "RouteClassifier",
    "build_classifier_config",
    "Responder",
    "build_responder_configs",
    "build_responders",
    "Router",
    "Workflow",
    "LeadRecord",
]
