"""Roteador (Router)

Tabela fixa rota -> Responder, validada na inicialização contra a enumeração
do classificador. Adicionar uma rota é mudança de dados, não de fluxo.
"""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from consultor.models.agents import RouteIdentifier

from .errors import RouterConfigurationError, UnknownRoute
from .responders import Responder

logger = logging.getLogger(__name__)


class Router:
    """Mapeamento somente-leitura de rotas para responders"""

    def __init__(
        self,
        responders: Mapping[RouteIdentifier, Responder],
        classifier_routes: Iterable[RouteIdentifier] = RouteIdentifier,
    ):
        """
        Args:
            responders: responder de cada rota
            classifier_routes: rotas que o classificador pode emitir

        Raises:
            RouterConfigurationError: tabela inconsistente
        """
        self._table = MappingProxyType(dict(responders))
        self.validate(frozenset(classifier_routes))

    def validate(self, classifier_routes: frozenset[RouteIdentifier]) -> None:
        """Confere se o domínio da tabela é exatamente a enumeração do classificador"""
        table_routes = frozenset(self._table)
        missing = classifier_routes - table_routes
        extra = table_routes - classifier_routes
        if missing or extra:
            raise RouterConfigurationError(
                "rotas do roteador diferem do classificador: "
                f"sem responder={sorted(r.value for r in missing)}, "
                f"sobrando={sorted(r.value for r in extra)}"
            )

        for route, responder in self._table.items():
            if responder.route is not route:
                raise RouterConfigurationError(
                    f"responder {responder.name!r} ({responder.route.value}) "
                    f"registrado na rota {route.value}"
                )
            if responder.config.output_schema is not None:
                raise RouterConfigurationError(
                    f"responder {responder.name!r} não pode declarar output_schema"
                )
        logger.debug(f"roteador validado com {len(self._table)} rotas")

    @property
    def routes(self) -> frozenset[RouteIdentifier]:
        return frozenset(self._table)

    def route(self, route_id: RouteIdentifier) -> Responder:
        """Responder vinculado à rota

        Raises:
            UnknownRoute: rota sem responder (não deveria ocorrer após validate)
        """
        try:
            return self._table[route_id]
        except (KeyError, TypeError) as e:
            route = route_id if isinstance(route_id, RouteIdentifier) else None
            raise UnknownRoute(f"nenhum responder para a rota {route_id!r}", route=route, cause=e) from e

    def get_route_info(self) -> dict:
        """Informações da tabela de rotas (debug/log)"""
        return {
            route.value: {"responder": responder.name, "model": responder.model}
            for route, responder in self._table.items()
        }
