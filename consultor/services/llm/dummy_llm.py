"""Implementação dummy (desenvolvimento offline e testes)"""

import unicodedata

from consultor.models.agents import ResponderConfig, RouteIdentifier, RunResult
from consultor.models.conversation import ConversationState, Turn

from .base import BaseModelInvoker, ModelInvocationError

# Palavras-chave -> rota (a primeira que casar vence)
KEYWORD_ROUTES: list[tuple[tuple[str, ...], RouteIdentifier]] = [
    (("financ", "parcela", "entrada", "taxa"), RouteIdentifier.FINANCING),
    (("seminovo", "usado"), RouteIdentifier.USED_VEHICLES),
    (("test drive", "test-drive", "testar"), RouteIdentifier.TEST_DRIVE),
    (("garantia",), RouteIdentifier.WARRANTY),
    (("revisao", "manutencao", "oficina"), RouteIdentifier.SERVICE),
    (("agendar", "agenda", "horario"), RouteIdentifier.SCHEDULING),
    (("feirao",), RouteIdentifier.SALES_EVENT),
    (("promocao", "oferta", "desconto"), RouteIdentifier.PROMOTION),
    (("peca", "acessorio"), RouteIdentifier.PARTS),
    (("contato", "me liga", "meu telefone"), RouteIdentifier.LEAD_CAPTURE),
    (("0km", "zero km", "novo", "lancamento"), RouteIdentifier.NEW_VEHICLES),
]


def _normalize(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text.lower())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def guess_route(text: str) -> RouteIdentifier:
    """Rota por palavra-chave; sem correspondência cai em saudação"""
    normalized = _normalize(text)
    for keywords, route in KEYWORD_ROUTES:
        if any(kw in normalized for kw in keywords):
            return route
    return RouteIdentifier.GREETING


class DummyModelInvoker(BaseModelInvoker):
    """Provedor de teste: não chama nenhuma API"""

    provider = "dummy"

    @property
    def default_model(self) -> str:
        return "dummy-model"

    def invoke(self, config: ResponderConfig, history: ConversationState) -> RunResult:
        """Resposta simulada

        Args:
            config: configuração do responder
            history: histórico da requisição

        Returns:
            RunResult simulado
        """
        user_text = history.last_user_text

        if config.output_schema is not None:
            if "route" not in config.output_schema.model_fields:
                raise ModelInvocationError(
                    f"schema não suportado pelo dummy: {config.output_schema.__name__}",
                    provider=self.provider,
                    model="dummy-model",
                )
            parsed = config.output_schema.model_validate({"route": guess_route(user_text).value})
            text = parsed.model_dump_json()
        else:
            parsed = None
            text = (
                f"[modo dummy - {config.name}] Olá! Sou o consultor Fortes. "
                f"Você disse: {user_text[:100]}"
            )

        return RunResult(
            raw_output={"output_text": text},
            new_turns=[Turn.assistant(text, author=config.name)],
            output_text=text,
            parsed=parsed,
            route=config.route,
            model="dummy-model",
            responder=config.name,
            usage={"input_tokens": 0, "output_tokens": 0},
        )
