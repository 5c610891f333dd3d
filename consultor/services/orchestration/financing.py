"""Cálculo de financiamento (tabela Price)

    valor_financiado = preco_base × (1 − entrada)
    parcela = valor_financiado × i / (1 − (1 + i)^(−n))

onde i é a taxa mensal e n o número de meses.
"""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Iterable, Optional

DEFAULT_TERMS = (36, 48, 60)


@dataclass(frozen=True)
class FinancingQuote:
    """Uma opção de prazo calculada"""

    principal: float
    down_payment_fraction: float
    down_payment: float
    monthly_rate: float
    term_months: int
    financed: float
    payment: float

    def to_dict(self) -> dict:
        data = asdict(self)
        data["principal_brl"] = format_brl(self.principal)
        data["down_payment_brl"] = format_brl(self.down_payment)
        data["financed_brl"] = format_brl(self.financed)
        data["payment_brl"] = format_brl(self.payment)
        data["monthly_rate_pct"] = f"{self.monthly_rate * 100:.2f}%".replace(".", ",")
        return data


def annuity_payment(financed: float, monthly_rate: float, term_months: int) -> float:
    """Parcela fixa pela fórmula de anuidade

    Args:
        financed: valor financiado
        monthly_rate: taxa mensal (0.0155 = 1,55% a.m.)
        term_months: número de parcelas

    Returns:
        Valor da parcela
    """
    if term_months <= 0:
        raise ValueError(f"prazo inválido: {term_months}")
    if monthly_rate < 0:
        raise ValueError(f"taxa negativa: {monthly_rate}")
    if monthly_rate == 0:
        return financed / term_months
    return financed * monthly_rate / (1 - (1 + monthly_rate) ** (-term_months))


def applicable_rate(
    standard_rate: float,
    promotional_rate: Optional[float] = None,
    promo_until: Optional[date] = None,
    today: Optional[date] = None,
) -> float:
    """Taxa promocional enquanto a promoção estiver vigente, senão a taxa padrão"""
    if promotional_rate is None or promo_until is None:
        return standard_rate
    today = today or date.today()
    return promotional_rate if today <= promo_until else standard_rate


def quote(
    principal: float,
    down_payment_fraction: float,
    monthly_rate: float,
    term_months: int,
) -> FinancingQuote:
    """Calcula uma opção de financiamento"""
    if principal <= 0:
        raise ValueError(f"preço inválido: {principal}")
    if not 0 <= down_payment_fraction < 1:
        raise ValueError(f"entrada deve estar em [0, 1): {down_payment_fraction}")

    financed = principal * (1 - down_payment_fraction)
    return FinancingQuote(
        principal=principal,
        down_payment_fraction=down_payment_fraction,
        down_payment=principal * down_payment_fraction,
        monthly_rate=monthly_rate,
        term_months=term_months,
        financed=financed,
        payment=annuity_payment(financed, monthly_rate, term_months),
    )


def quote_terms(
    principal: float,
    down_payment_fraction: float,
    monthly_rate: float,
    terms: Iterable[int] = DEFAULT_TERMS,
) -> list[FinancingQuote]:
    """Calcula várias opções de prazo para apresentar juntas"""
    return [quote(principal, down_payment_fraction, monthly_rate, n) for n in terms]


def format_brl(value: float) -> str:
    """Formata em reais: 80000.5 -> 'R$ 80.000,50'"""
    text = f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {text}"


# =============================================================================
# Ferramenta exposta ao responder de financiamento
# =============================================================================

FINANCING_TOOL_NAME = "calcular_financiamento"

FINANCING_TOOL_PARAMETERS = {
    "type": "object",
    "properties": {
        "preco_base": {"type": "number", "description": "Preço do veículo em reais"},
        "entrada": {"type": "number", "description": "Fração de entrada, ex.: 0.2"},
        "taxa_mensal": {"type": "number", "description": "Taxa mensal padrão, ex.: 0.0155"},
        "taxa_promocional": {"type": ["number", "null"], "description": "Taxa mensal promocional"},
        "promo_ate": {"type": ["string", "null"], "description": "Fim da promoção (YYYY-MM-DD)"},
        "prazos": {
            "type": "array",
            "items": {"type": "integer"},
            "description": "Prazos em meses, ex.: [36, 48, 60]",
        },
    },
    "required": ["preco_base", "entrada", "taxa_mensal"],
}


def financing_tool_handler(arguments: dict, today: Optional[date] = None) -> dict:
    """Executa o cálculo pedido pelo modelo

    Args:
        arguments: argumentos no formato de FINANCING_TOOL_PARAMETERS
        today: data de referência para a promoção (None usa hoje)

    Returns:
        {"taxa_aplicada": ..., "promocional": bool, "opcoes": [...]}
    """
    promo_until = arguments.get("promo_ate")
    promo_date = date.fromisoformat(promo_until) if promo_until else None
    standard_rate = float(arguments["taxa_mensal"])
    promo_rate = arguments.get("taxa_promocional")
    rate = applicable_rate(
        standard_rate,
        float(promo_rate) if promo_rate is not None else None,
        promo_date,
        today=today,
    )
    terms = arguments.get("prazos") or DEFAULT_TERMS
    quotes = quote_terms(
        float(arguments["preco_base"]),
        float(arguments["entrada"]),
        rate,
        [int(n) for n in terms],
    )
    return {
        "taxa_aplicada": rate,
        "promocional": rate != standard_rate,
        "opcoes": [q.to_dict() for q in quotes],
    }
