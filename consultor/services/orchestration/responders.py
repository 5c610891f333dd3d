"""Responders (um por rota)

Cada responder é uma configuração imutável (instruções, modelo, parâmetros,
ferramentas) executada pelo provedor de modelo sobre o histórico da requisição.
"""

import logging
from typing import TYPE_CHECKING

from consultor.models.agents import (
    FileSearchTool,
    FunctionTool,
    ModelSettings,
    ResponderConfig,
    RouteIdentifier,
    RunResult,
    WebSearchTool,
)
from consultor.models.conversation import ConversationState
from consultor.prompts import (
    FINANCING_PROMPT,
    GREETING_PROMPT,
    LEAD_CAPTURE_PROMPT,
    LEAD_CSV_HEADER,
    NEW_VEHICLES_PROMPT,
    PARTS_PROMPT,
    PROMOTION_PROMPT,
    SALES_EVENT_PROMPT,
    SCHEDULING_PROMPT,
    SERVICE_PROMPT,
    TEST_DRIVE_PROMPT,
    USED_VEHICLES_PROMPT,
    WARRANTY_PROMPT,
)
from consultor.settings import Settings, settings as default_settings
from consultor.services.llm.base import ModelInvocationError
from consultor.services.llm.extraction import ResponseShape, detect_shape, extract_text

from .errors import ResponderFailure
from .financing import FINANCING_TOOL_NAME, FINANCING_TOOL_PARAMETERS, financing_tool_handler
from .web_filter import filter_offsite_lines

if TYPE_CHECKING:
    from consultor.services.llm.base import BaseModelInvoker

logger = logging.getLogger(__name__)

# Formatos de resposta bruta que contêm texto de verdade
_TEXT_SHAPES = (ResponseShape.PLAIN_TEXT, ResponseShape.CONSOLIDATED_TEXT, ResponseShape.NESTED_OUTPUT)


class Responder:
    """Executa uma ResponderConfig vinculada a uma rota"""

    def __init__(self, invoker: "BaseModelInvoker", config: ResponderConfig):
        """
        Args:
            invoker: provedor de modelo
            config: configuração do responder (precisa de route)
        """
        if config.route is None:
            raise ValueError(f"responder {config.name!r} sem rota")
        self.invoker = invoker
        self.config = config

    @property
    def route(self) -> RouteIdentifier:
        return self.config.route

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def model(self) -> str:
        return self.config.model

    def run(self, history: ConversationState) -> RunResult:
        """Gera a resposta para o histórico

        Args:
            history: histórico já estendido pelo classificador

        Returns:
            RunResult com output_text não vazio

        Raises:
            ResponderFailure: erro do modelo ou saída vazia
        """
        try:
            result = self.invoker.invoke(self.config, history)
        except ModelInvocationError as e:
            raise ResponderFailure(
                f"falha na chamada do responder {self.name}", route=self.route, cause=e
            ) from e
        except Exception as e:  # noqa: BLE001 - erro inesperado do provedor vira falha tipada
            logger.exception(f"erro inesperado no responder {self.name}")
            raise ResponderFailure(
                f"erro inesperado no responder {self.name}", route=self.route, cause=e
            ) from e

        text = result.output_text
        if not text and detect_shape(result.raw_output) in _TEXT_SHAPES:
            text = extract_text(result.raw_output)

        # Busca web: só ficam resultados dos domínios permitidos
        if text and self.config.allowed_domains:
            text = filter_offsite_lines(text, self.config.allowed_domains)

        if not text or not text.strip():
            raise ResponderFailure(
                f"responder {self.name} não produziu saída utilizável", route=self.route
            )

        history.extend(result.new_turns)
        result.output_text = text
        result.route = self.route
        result.responder = self.name
        return result


# =============================================================================
# Catálogo de responders
# =============================================================================

def _chat_settings() -> ModelSettings:
    return ModelSettings(temperature=1.0, top_p=1.0, max_output_tokens=2048)


def _reasoning_settings() -> ModelSettings:
    return ModelSettings(reasoning_effort="low")


def build_financing_tool() -> FunctionTool:
    return FunctionTool(
        name=FINANCING_TOOL_NAME,
        description="Calcula entrada, valor financiado e parcela para um ou mais prazos.",
        parameters=FINANCING_TOOL_PARAMETERS,
        handler=financing_tool_handler,
    )


def build_responder_configs(current: Settings | None = None) -> dict[RouteIdentifier, ResponderConfig]:
    """Monta a configuração de todos os responders

    Args:
        current: Settings de origem (None usa a instância global)

    Returns:
        Mapeamento rota -> ResponderConfig
    """
    s = current or default_settings
    chat_model = s.openai_model_responder
    reasoning_model = s.openai_model_reasoning
    whatsapp = s.dealer_whatsapp

    def fmt(template: str, domain: str = "") -> str:
        return template.format(whatsapp=whatsapp, domain=domain, header=LEAD_CSV_HEADER)

    configs = [
        ResponderConfig(
            name="carros novos",
            route=RouteIdentifier.NEW_VEHICLES,
            model=chat_model,
            instructions=fmt(NEW_VEHICLES_PROMPT, s.new_vehicles_domain),
            tools=(WebSearchTool(allowed_domains=(s.new_vehicles_domain,)),),
            settings=_chat_settings(),
        ),
        ResponderConfig(
            name="semi novos",
            route=RouteIdentifier.USED_VEHICLES,
            model=chat_model,
            instructions=fmt(USED_VEHICLES_PROMPT, s.used_vehicles_domain),
            tools=(WebSearchTool(allowed_domains=(s.used_vehicles_domain,)),),
            settings=_chat_settings(),
        ),
        ResponderConfig(
            name="Financiamento",
            route=RouteIdentifier.FINANCING,
            model=chat_model,
            instructions=fmt(FINANCING_PROMPT),
            tools=(
                FileSearchTool(vector_store_ids=tuple(s.file_search_vector_store_ids)),
                build_financing_tool(),
            ),
            settings=_chat_settings(),
        ),
        ResponderConfig(
            name="Leads",
            route=RouteIdentifier.LEAD_CAPTURE,
            model=chat_model,
            instructions=fmt(LEAD_CAPTURE_PROMPT),
            settings=_chat_settings(),
        ),
        ResponderConfig(
            name="saudacao",
            route=RouteIdentifier.GREETING,
            model=chat_model,
            instructions=fmt(GREETING_PROMPT),
            settings=_chat_settings(),
        ),
        ResponderConfig(
            name="garantia",
            route=RouteIdentifier.WARRANTY,
            model=reasoning_model,
            instructions=fmt(WARRANTY_PROMPT),
            settings=_reasoning_settings(),
        ),
        ResponderConfig(
            name="agendamento",
            route=RouteIdentifier.SCHEDULING,
            model=chat_model,
            instructions=fmt(SCHEDULING_PROMPT),
            settings=_chat_settings(),
        ),
        ResponderConfig(
            name="revisao",
            route=RouteIdentifier.SERVICE,
            model=reasoning_model,
            instructions=fmt(SERVICE_PROMPT),
            settings=_reasoning_settings(),
        ),
        ResponderConfig(
            name="promocao",
            route=RouteIdentifier.PROMOTION,
            model=chat_model,
            instructions=fmt(PROMOTION_PROMPT, s.new_vehicles_domain),
            tools=(WebSearchTool(allowed_domains=(s.new_vehicles_domain,)),),
            settings=_chat_settings(),
        ),
        ResponderConfig(
            name="feirao",
            route=RouteIdentifier.SALES_EVENT,
            model=chat_model,
            instructions=fmt(SALES_EVENT_PROMPT, s.new_vehicles_domain),
            tools=(WebSearchTool(allowed_domains=(s.new_vehicles_domain,)),),
            settings=_chat_settings(),
        ),
        ResponderConfig(
            name="pecas",
            route=RouteIdentifier.PARTS,
            model=chat_model,
            instructions=fmt(PARTS_PROMPT),
            settings=_chat_settings(),
        ),
        ResponderConfig(
            name="Teste_driver",
            route=RouteIdentifier.TEST_DRIVE,
            model=reasoning_model,
            instructions=fmt(TEST_DRIVE_PROMPT),
            settings=_reasoning_settings(),
        ),
    ]
    return {config.route: config for config in configs}


def build_responders(
    invoker: "BaseModelInvoker",
    configs: dict[RouteIdentifier, ResponderConfig] | None = None,
) -> dict[RouteIdentifier, Responder]:
    """Instancia um Responder por rota"""
    configs = configs if configs is not None else build_responder_configs()
    return {route: Responder(invoker, config) for route, config in configs.items()}
