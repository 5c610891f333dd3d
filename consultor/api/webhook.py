"""Webhook WhatsApp (Twilio) e health check

POST /twilio/whatsapp recebe o formulário da Twilio (From, Body), executa o
Workflow em uma thread e responde com TwiML. O registro no CRM acontece
depois que a resposta já foi decidida e nunca altera o texto enviado.
"""

import logging
from typing import Optional

from starlette.applications import Starlette
from starlette.background import BackgroundTask
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route
from twilio.twiml.messaging_response import MessagingResponse

from consultor.models.agents import InteractionRecord, RouteIdentifier, RunResult
from consultor.services.crm import LeadService
from consultor.services.orchestration import LeadRecord, OrchestrationError, Workflow
from consultor.settings import settings

logger = logging.getLogger(__name__)

LEAD_CONFIRMATION_REPLY = (
    "Obrigado, {nome}! Seus dados foram registrados e um consultor da Globo FIAT "
    "vai falar com você em breve."
)


def twiml(text: str, background: Optional[BackgroundTask] = None) -> Response:
    """Resposta TwiML com uma única mensagem"""
    reply = MessagingResponse()
    reply.message(text)
    return Response(str(reply), media_type="text/xml", background=background)


def strip_whatsapp_prefix(sender: str) -> str:
    return sender.replace("whatsapp:", "", 1).strip()


def record_in_crm(
    lead_service: LeadService,
    phone: str,
    interaction: InteractionRecord,
    lead_record: Optional[LeadRecord],
) -> None:
    """Registro no CRM depois do envio da resposta; falhas só vão para o log"""
    try:
        lead_service.record_exchange(phone, interaction, lead_record)
    except Exception:  # noqa: BLE001 - a resposta já foi enviada
        logger.exception(f"Falha ao registrar no CRM: {phone}")


def lead_from_result(result: RunResult) -> Optional[LeadRecord]:
    """LeadRecord quando o agente de leads devolveu uma linha CSV válida"""
    if result.route != RouteIdentifier.LEAD_CAPTURE:
        return None
    return LeadRecord.from_csv_line(result.output_text)


def create_app(workflow: Optional[Workflow] = None, lead_service: Optional[LeadService] = None) -> Starlette:
    """Aplicação Starlette

    Args:
        workflow: pipeline pronto (None monta a partir da configuração)
        lead_service: CRM (None conecta com a configuração; sem credenciais fica desativado)
    """
    workflow = workflow or Workflow.from_settings()
    lead_service = lead_service or LeadService.from_settings()

    async def health(_request: Request) -> JSONResponse:
        store = lead_service.store
        return JSONResponse({
            "ok": True,
            "googleSheets": store is not None,
            "planilha": store.title if store is not None else None,
        })

    async def whatsapp(request: Request) -> Response:
        form = await request.form()
        sender = strip_whatsapp_prefix(str(form.get("From", "")))
        body = str(form.get("Body", "")).strip()
        logger.info(f"📱 Mensagem de {sender}: {body[:50]}")

        if not body:
            return twiml(settings.fallback_reply)

        try:
            result = await run_in_threadpool(workflow.execute, body)
        except OrchestrationError as e:
            logger.exception(f"Falha no atendimento ({e.stage}): {e}")
            return twiml(settings.fallback_reply)

        reply = result.output_text or settings.fallback_reply
        lead_record = lead_from_result(result)
        if lead_record is not None:
            reply = LEAD_CONFIRMATION_REPLY.format(nome=lead_record.nome)

        background = None
        if lead_service.enabled and sender:
            interaction = result.to_interaction(body)
            interaction.outbound_text = reply
            background = BackgroundTask(record_in_crm, lead_service, sender, interaction, lead_record)

        logger.info(f"✅ Resposta enviada via {result.responder} ({len(reply)} caracteres)")
        return twiml(reply, background=background)

    routes = [
        Route("/health", endpoint=health, methods=["GET"]),
        Route("/twilio/whatsapp", endpoint=whatsapp, methods=["POST"]),
    ]
    return Starlette(debug=settings.app_debug, routes=routes)
