"""Modelos de agentes (responders)

Rotas, configuração de responders, ferramentas e o resultado de uma execução.
Configurações são criadas uma vez na inicialização e lidas por todas as requisições.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .conversation import Turn


class RouteIdentifier(str, Enum):
    """Rotas fixas que o classificador pode escolher"""

    NEW_VEHICLES = "new_vehicles"  # carros novos (0 km) FIAT
    USED_VEHICLES = "used_vehicles"  # seminovos multimarcas
    FINANCING = "financing"  # simulação de financiamento, entrada, taxas
    LEAD_CAPTURE = "lead_capture"  # cliente quer deixar contato
    GREETING = "greeting"  # saudação, apresentação, dúvidas gerais
    WARRANTY = "warranty"  # garantia de fábrica/estendida
    SCHEDULING = "scheduling"  # agendamento de visita/atendimento
    SERVICE = "service"  # revisão e manutenção
    PROMOTION = "promotion"  # promoções e combos da semana
    SALES_EVENT = "sales_event"  # feirões
    PARTS = "parts"  # peças e acessórios
    TEST_DRIVE = "test_drive"  # test drive


class RouteDecision(BaseModel):
    """Schema da saída estruturada do classificador"""
    model_config = ConfigDict(extra='forbid')

    route: RouteIdentifier = Field(description="Rota escolhida para a conversa")


# =============================================================================
# Parâmetros de modelo e ferramentas
# =============================================================================

@dataclass(frozen=True)
class ModelSettings:
    """Parâmetros de invocação do modelo

    Modelos de raciocínio usam reasoning_effort; os demais usam amostragem.
    """

    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_output_tokens: Optional[int] = None
    reasoning_effort: Optional[str] = None  # "minimal" | "low" | "medium" | "high"
    store: bool = True

    @property
    def is_reasoning(self) -> bool:
        return self.reasoning_effort is not None


@dataclass(frozen=True)
class WebSearchTool:
    """Busca web restrita a uma lista de domínios"""

    allowed_domains: tuple[str, ...]
    search_context_size: str = "medium"


@dataclass(frozen=True)
class FileSearchTool:
    """Busca em um corpus de documentos já indexado (vector store)"""

    vector_store_ids: tuple[str, ...]


@dataclass(frozen=True)
class FunctionTool:
    """Função local exposta ao modelo (executada no próprio processo)"""

    name: str
    description: str
    parameters: dict
    handler: Callable[[dict], Any] = field(compare=False)

    def call(self, arguments: dict) -> Any:
        return self.handler(arguments)


ToolSpec = Union[WebSearchTool, FileSearchTool, FunctionTool]


@dataclass(frozen=True)
class ResponderConfig:
    """Configuração imutável de um responder (ou do classificador)"""

    name: str
    model: str
    instructions: str
    route: Optional[RouteIdentifier] = None  # None apenas para o classificador
    output_schema: Optional[type[BaseModel]] = None
    tools: tuple[ToolSpec, ...] = ()
    settings: ModelSettings = field(default_factory=ModelSettings)

    @property
    def web_search(self) -> Optional[WebSearchTool]:
        return next((t for t in self.tools if isinstance(t, WebSearchTool)), None)

    @property
    def file_search(self) -> Optional[FileSearchTool]:
        return next((t for t in self.tools if isinstance(t, FileSearchTool)), None)

    @property
    def functions(self) -> dict[str, FunctionTool]:
        return {t.name: t for t in self.tools if isinstance(t, FunctionTool)}

    @property
    def allowed_domains(self) -> tuple[str, ...]:
        web = self.web_search
        return web.allowed_domains if web else ()


# =============================================================================
# Resultados
# =============================================================================

@dataclass
class InteractionRecord:
    """Registro de uma troca de mensagens, entregue ao CRM"""

    inbound_text: str
    outbound_text: str
    route_taken: Optional[RouteIdentifier] = None


@dataclass
class RunResult:
    """Resultado de uma invocação de responder/classificador"""

    raw_output: Any
    new_turns: list[Turn] = field(default_factory=list)
    output_text: str = ""
    parsed: Any = None  # só para saídas estruturadas (classificador)
    route: Optional[RouteIdentifier] = None
    model: Optional[str] = None
    responder: Optional[str] = None
    usage: Optional[dict] = None

    def to_interaction(self, inbound_text: str) -> InteractionRecord:
        return InteractionRecord(
            inbound_text=inbound_text,
            outbound_text=self.output_text,
            route_taken=self.route,
        )


__all__ = [
    'RouteIdentifier',
    'RouteDecision',
    'ModelSettings',
    'WebSearchTool',
    'FileSearchTool',
    'FunctionTool',
    'ToolSpec',
    'ResponderConfig',
    'InteractionRecord',
    'RunResult',
]
