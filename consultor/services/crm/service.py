"""Registro de leads após cada resposta

Fluxo por mensagem: buscar/criar o lead, registrar entrada e saída,
extrair dados da conversa, recalcular a pontuação e avisar o vendedor
quando o lead ficar quente. Tudo best-effort: a resposta ao cliente já
foi decidida antes desta etapa.
"""

import logging
from typing import TYPE_CHECKING, Optional

from consultor.models.agents import InteractionRecord
from consultor.settings import Settings, settings as default_settings

from .lead_extraction import extract_lead_data
from .notifier import SellerNotifier
from .scoring import calculate_score, classify_lead
from .sheets_store import SheetsLeadStore, to_columns

if TYPE_CHECKING:
    from consultor.services.orchestration.lead_record import LeadRecord

logger = logging.getLogger(__name__)


def _lead_record_updates(record: "LeadRecord") -> dict:
    """Colunas da aba LEADS preenchidas a partir de uma linha do agente de leads"""
    updates = {"Nome": record.nome, "Tipo_Interesse": record.interesse}
    notes = [f"Cidade: {record.cidade_uf}", record.observacoes]
    if record.veiculo_troca:
        updates["Tem_Carro_Troca"] = "sim"
    updates["Observacoes"] = " | ".join(n for n in notes if n)
    return updates


class LeadService:
    """Fachada do CRM usada pelo webhook"""

    def __init__(
        self,
        store: Optional[SheetsLeadStore],
        notifier: Optional[SellerNotifier] = None,
        hot_threshold: int = 100,
    ):
        self.store = store
        self.notifier = notifier
        self.hot_threshold = hot_threshold

    @classmethod
    def from_settings(cls, current: Settings | None = None) -> "LeadService":
        s = current or default_settings
        return cls(
            store=SheetsLeadStore.connect(s),
            notifier=SellerNotifier.from_settings(s),
            hot_threshold=s.hot_lead_threshold,
        )

    @property
    def enabled(self) -> bool:
        return self.store is not None

    def record_exchange(
        self,
        phone: str,
        interaction: InteractionRecord,
        lead_record: Optional["LeadRecord"] = None,
    ) -> Optional[dict]:
        """Registra uma troca de mensagens no CRM

        Args:
            phone: telefone do cliente (sem prefixo whatsapp:)
            interaction: mensagem recebida, resposta e rota
            lead_record: linha estruturada produzida pelo agente de leads

        Returns:
            Resumo {lead_id, score, classification, notified}, ou None sem CRM
        """
        if self.store is None:
            return None

        agent = interaction.route_taken.value if interaction.route_taken else "desconhecido"

        lead = self.store.get_lead_by_phone(phone)
        if lead is None:
            lead_id = self.store.create_lead({"telefone": phone})
            lead = {"ID": lead_id, "Telefone": phone}
        lead_id = lead.get("ID")

        self.store.log_interaction(lead_id, phone, "entrada", agent, client_message=interaction.inbound_text)
        self.store.log_interaction(lead_id, phone, "saida", agent, bot_message=interaction.outbound_text)

        updates = to_columns(extract_lead_data(interaction.inbound_text, interaction.outbound_text))
        if lead_record is not None:
            updates.update(_lead_record_updates(lead_record))

        merged = {**lead, **updates}
        score = calculate_score(merged)
        classification = classify_lead(score)
        updates.update({"Pontuacao": score, "Classificacao": classification})
        self.store.update_lead(phone, updates)

        previous = str(lead.get("Classificacao", ""))
        notified = False
        if score >= self.hot_threshold and previous != "quente" and self.notifier is not None:
            notified = self.notifier.notify_hot_lead(merged, score)

        logger.info(f"Lead {lead_id}: pontuação {score} ({classification})")
        return {
            "lead_id": lead_id,
            "score": score,
            "classification": classification,
            "notified": notified,
        }
