"""Aviso de lead quente ao vendedor via WhatsApp (Twilio)"""

import logging
from typing import Any, Optional

from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client

from consultor.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def _whatsapp(number: str) -> str:
    return number if number.startswith("whatsapp:") else f"whatsapp:{number}"


class SellerNotifier:
    """Envia uma mensagem ao vendedor responsável"""

    def __init__(self, client: Any, from_number: str, seller_number: str):
        self.client = client
        self.from_number = _whatsapp(from_number)
        self.seller_number = _whatsapp(seller_number)

    @classmethod
    def from_settings(cls, current: Settings | None = None) -> Optional["SellerNotifier"]:
        """None se as credenciais Twilio ou o número do vendedor faltarem"""
        s = current or default_settings
        if not (s.twilio_account_sid and s.twilio_auth_token and s.twilio_whatsapp_from and s.seller_whatsapp):
            logger.warning("Twilio não configurado: avisos ao vendedor desativados")
            return None
        client = Client(s.twilio_account_sid, s.twilio_auth_token)
        return cls(client, s.twilio_whatsapp_from, s.seller_whatsapp)

    def notify_hot_lead(self, lead: dict, score: int) -> bool:
        """Avisa sobre um lead quente

        Args:
            lead: registro do lead (colunas da aba LEADS)
            score: pontuação calculada

        Returns:
            True se a mensagem foi aceita pela Twilio
        """
        body = "\n".join([
            "🔥 LEAD QUENTE!",
            "",
            f"Nome: {lead.get('Nome') or 'Não informado'}",
            f"Telefone: {lead.get('Telefone', '')}",
            f"Interesse: {lead.get('Modelo_Interesse') or 'Não especificado'}",
            f"Pontuação: {score}",
            f"Prazo: {lead.get('Prazo_Compra') or 'Não informado'}",
            "",
            "Entre em contato o quanto antes!",
        ])
        try:
            message = self.client.messages.create(
                from_=self.from_number,
                to=self.seller_number,
                body=body,
            )
        except (TwilioRestException, OSError) as e:
            logger.error(f"Erro ao notificar vendedor: {e}")
            return False

        logger.info(f"Vendedor notificado: {lead.get('Telefone', '')} (sid={getattr(message, 'sid', None)})")
        return True
