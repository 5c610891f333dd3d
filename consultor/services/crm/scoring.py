"""Pontuação e classificação de leads (soma ponderada simples)"""

from typing import Mapping


def _text(lead: Mapping, key: str) -> str:
    value = lead.get(key)
    return "" if value is None else str(value).strip()


def calculate_score(lead: Mapping) -> int:
    """Pontuação do lead a partir das colunas da aba LEADS"""
    score = 0

    # Prazo de compra
    deadline = _text(lead, "Prazo_Compra").lower()
    if "imediato" in deadline or "urgente" in deadline:
        score += 50
    elif "30" in deadline or "curto" in deadline:
        score += 30
    elif "90" in deadline or "médio" in deadline:
        score += 15

    # Orçamento definido
    if _text(lead, "Faixa_Preco_Min") and _text(lead, "Faixa_Preco_Max"):
        score += 30

    # Modelo / versão específicos
    if _text(lead, "Modelo_Interesse"):
        score += 10
    if _text(lead, "Versao_Interesse"):
        score += 20

    # Forma de pagamento
    payment = _text(lead, "Forma_Pagamento").lower()
    if "vista" in payment:
        score += 40
    elif "financ" in payment:
        score += 20
    elif "consórcio" in payment or "consorcio" in payment:
        score += 10

    # Carro na troca
    if _text(lead, "Tem_Carro_Troca").lower() == "sim":
        score += 25

    return score


def classify_lead(score: int) -> str:
    if score >= 100:
        return "quente"
    if score >= 60:
        return "morno"
    if score >= 30:
        return "frio"
    return "muito_frio"
