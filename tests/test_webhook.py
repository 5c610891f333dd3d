"""Testes do webhook WhatsApp"""

import logging
from unittest.mock import Mock

import pytest
from starlette.testclient import TestClient

from consultor.api import create_app
from consultor.models.agents import RouteIdentifier, RunResult
from consultor.services.orchestration import ClassificationFailure, LeadRecord
from consultor.settings import settings

LEAD_LINE = (
    "2025-10-18,Maria Souza,41999998888,Curitiba/PR,whatsapp,Pulse,whatsapp,manha,"
    "nao,,sim,,,sim,70,novo,"
)


@pytest.fixture
def workflow():
    workflow = Mock()
    workflow.execute.return_value = RunResult(
        raw_output=None,
        output_text="Ola! Sou o consultor Fortes.",
        route=RouteIdentifier.GREETING,
        responder="saudacao",
    )
    return workflow


@pytest.fixture
def lead_service():
    service = Mock()
    service.enabled = True
    service.store = Mock(title="CRM Globo FIAT")
    return service


@pytest.fixture
def client(workflow, lead_service):
    return TestClient(create_app(workflow=workflow, lead_service=lead_service))


def _post(client, body: str, sender: str = "whatsapp:+5541999998888"):
    return client.post("/twilio/whatsapp", data={"From": sender, "Body": body})


class TestWhatsAppWebhook:
    """POST /twilio/whatsapp"""

    def test_reply_as_twiml(self, client, workflow, lead_service):
        """Mensagem normal: workflow, CRM e resposta TwiML"""
        response = _post(client, "oi")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/xml")
        assert "<Message>Ola! Sou o consultor Fortes.</Message>" in response.text
        workflow.execute.assert_called_once_with("oi")

        phone, interaction, lead_record = lead_service.record_exchange.call_args.args
        assert phone == "+5541999998888"
        assert interaction.inbound_text == "oi"
        assert interaction.outbound_text == "Ola! Sou o consultor Fortes."
        assert interaction.route_taken is RouteIdentifier.GREETING
        assert lead_record is None

    def test_empty_body_gets_fallback(self, client, workflow):
        """Corpo vazio não chega ao workflow"""
        response = _post(client, "   ")

        assert settings.fallback_reply in response.text
        workflow.execute.assert_not_called()

    def test_orchestration_error_gets_fallback(self, client, workflow, lead_service):
        """Falha no fluxo vira a resposta padrão"""
        workflow.execute.side_effect = ClassificationFailure("timeout")

        response = _post(client, "oi")

        assert response.status_code == 200
        assert settings.fallback_reply in response.text
        lead_service.record_exchange.assert_not_called()

    def test_lead_capture_reply(self, client, workflow, lead_service):
        """Linha CSV do agente de leads vira confirmação ao cliente"""
        workflow.execute.return_value = RunResult(
            raw_output=None,
            output_text=LEAD_LINE,
            route=RouteIdentifier.LEAD_CAPTURE,
            responder="Leads",
        )

        response = _post(client, "Sou a Maria, de Curitiba, quero um Pulse")

        assert "Obrigado, Maria Souza!" in response.text
        assert "41999998888" not in response.text
        _, interaction, lead_record = lead_service.record_exchange.call_args.args
        assert isinstance(lead_record, LeadRecord)
        assert lead_record.cidade_uf == "Curitiba/PR"
        assert interaction.outbound_text.startswith("Obrigado")

    def test_crm_disabled(self, workflow):
        """Sem CRM a resposta segue normalmente"""
        service = Mock(enabled=False, store=None)
        client = TestClient(create_app(workflow=workflow, lead_service=service))

        response = _post(client, "oi")

        assert "Ola! Sou o consultor Fortes." in response.text
        service.record_exchange.assert_not_called()

    def test_crm_failure_keeps_reply(self, client, workflow, lead_service, caplog):
        """Erro no CRM depois da resposta não vira 500"""
        lead_service.record_exchange.side_effect = RuntimeError("planilha fora do ar")

        with caplog.at_level(logging.ERROR, logger="consultor.api.webhook"):
            response = _post(client, "oi")

        assert response.status_code == 200
        assert "<Message>Ola! Sou o consultor Fortes.</Message>" in response.text
        lead_service.record_exchange.assert_called_once()
        assert "Falha ao registrar no CRM" in caplog.text


class TestHealth:
    """GET /health"""

    def test_health_with_sheets(self, client):
        """Planilha conectada"""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "googleSheets": True, "planilha": "CRM Globo FIAT"}

    def test_health_without_sheets(self, workflow):
        """Planilha não configurada"""
        service = Mock(enabled=False, store=None)
        client = TestClient(create_app(workflow=workflow, lead_service=service))
        assert client.get("/health").json() == {"ok": True, "googleSheets": False, "planilha": None}
