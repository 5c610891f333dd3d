"""Erros da camada de orquestração"""

from consultor.models.agents import RouteIdentifier


class OrchestrationError(Exception):
    """Falha tipada do pipeline classificar -> rotear -> responder

    Attributes:
        stage: etapa que falhou ("classify" | "route" | "respond")
        route: rota envolvida, quando já conhecida
        cause: exceção original, quando houver
    """

    stage: str = "unknown"

    def __init__(
        self,
        message: str,
        route: RouteIdentifier | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.route = route
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"stage={self.stage}"]
        if self.route is not None:
            parts.append(f"route={self.route.value}")
        if self.cause is not None:
            parts.append(f"cause={type(self.cause).__name__}: {self.cause}")
        return f"{self.message} ({', '.join(parts)})"


class ClassificationFailure(OrchestrationError):
    """O classificador falhou ou devolveu algo fora da enumeração"""

    stage = "classify"


class UnknownRoute(OrchestrationError):
    """Nenhum responder vinculado à rota (erro de configuração)"""

    stage = "route"


class ResponderFailure(OrchestrationError):
    """O responder falhou ou não produziu saída utilizável"""

    stage = "respond"


class RouterConfigurationError(ValueError):
    """Tabela de rotas inconsistente com a enumeração do classificador"""
