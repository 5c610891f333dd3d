"""Extração de dados de lead por palavras-chave

Lê a mensagem do cliente + a resposta do bot e devolve campos da aba LEADS.
"""

import re

FIAT_MODELS = (
    "mobi", "argo", "cronos", "pulse", "fastback", "strada", "toro", "titano", "fiorino", "ducato",
)

PRICE_PATTERN = re.compile(r"(\d+)\s*(mil|k)\b")


def extract_lead_data(user_text: str, reply_text: str) -> dict:
    """Campos de lead encontrados na troca de mensagens

    Args:
        user_text: mensagem do cliente
        reply_text: resposta enviada

    Returns:
        Dicionário com as chaves encontradas (modelo_interesse, tipo_interesse,
        prazo_compra, forma_pagamento, faixa_preco_max, tem_carro_troca)
    """
    data = {}
    combined = f"{user_text or ''} {reply_text or ''}".lower()

    # Modelos FIAT
    for model in FIAT_MODELS:
        if model in combined:
            data["modelo_interesse"] = model.capitalize()
            break

    # Tipo de interesse ("seminovo" antes de "novo")
    if "seminovo" in combined or "usado" in combined:
        data["tipo_interesse"] = "seminovos"
    elif "novo" in combined or "0km" in combined or "zero" in combined:
        data["tipo_interesse"] = "carros_novos"
    elif "financ" in combined:
        data["tipo_interesse"] = "financiamento"

    # Prazo de compra
    if any(kw in combined for kw in ("urgente", "imediato", "agora")):
        data["prazo_compra"] = "imediato"
    elif "30 dias" in combined or "mês" in combined:
        data["prazo_compra"] = "30_dias"
    elif "90 dias" in combined or "3 meses" in combined:
        data["prazo_compra"] = "90_dias"

    # Forma de pagamento
    if "vista" in combined:
        data["forma_pagamento"] = "à vista"
    elif "financ" in combined or "parcela" in combined:
        data["forma_pagamento"] = "financiado"
    elif "consórcio" in combined or "consorcio" in combined:
        data["forma_pagamento"] = "consórcio"

    # Faixa de preço ("80 mil", "70k")
    match = PRICE_PATTERN.search(combined)
    if match:
        data["faixa_preco_max"] = int(match.group(1)) * 1000

    # Carro na troca
    if "troca" in combined or "trocar" in combined:
        data["tem_carro_troca"] = "sim"

    return data
