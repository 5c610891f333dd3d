"""
Prompts do consultor.

Este pacote centraliza as instruções do classificador e de cada responder.
"""

from .classifier import (
    ROUTE_CLASSIFICATION_PROMPT,
)

from .sales import (
    NEW_VEHICLES_PROMPT,
    USED_VEHICLES_PROMPT,
    PROMOTION_PROMPT,
    SALES_EVENT_PROMPT,
    PARTS_PROMPT,
    GREETING_PROMPT,
)

from .financing import (
    FINANCING_PROMPT,
)

from .leads import (
    LEAD_CSV_HEADER,
    LEAD_CAPTURE_PROMPT,
)

from .aftersales import (
    WARRANTY_PROMPT,
    SERVICE_PROMPT,
    SCHEDULING_PROMPT,
    TEST_DRIVE_PROMPT,
)

__all__ = [
    # Classificação de rota
    "ROUTE_CLASSIFICATION_PROMPT",
    # Vendas
    "NEW_VEHICLES_PROMPT",
    "USED_VEHICLES_PROMPT",
    "PROMOTION_PROMPT",
    "SALES_EVENT_PROMPT",
    "PARTS_PROMPT",
    "GREETING_PROMPT",
    # Financiamento
    "FINANCING_PROMPT",
    # Leads
    "LEAD_CSV_HEADER",
    "LEAD_CAPTURE_PROMPT",
    # Pós-venda
    "WARRANTY_PROMPT",
    "SERVICE_PROMPT",
    "SCHEDULING_PROMPT",
    "TEST_DRIVE_PROMPT",
]
