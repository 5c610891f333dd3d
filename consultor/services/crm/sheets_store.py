"""CRM em Google Sheets (abas LEADS e INTERACOES)

Acesso best-effort: falhas de rede/API são registradas no log e não
interrompem a resposta ao cliente.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional

import gspread
from gspread.exceptions import GSpreadException, WorksheetNotFound

from consultor.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

LEADS_SHEET = "LEADS"
INTERACTIONS_SHEET = "INTERACOES"

LEAD_COLUMNS = (
    "ID", "Data_Cadastro", "Nome", "Telefone", "Email", "Tipo_Interesse", "Modelo_Interesse",
    "Versao_Interesse", "Faixa_Preco_Min", "Faixa_Preco_Max", "Prazo_Compra", "Forma_Pagamento",
    "Tem_Carro_Troca", "Marca_Carro_Troca", "Modelo_Carro_Troca", "Ano_Carro_Troca",
    "KM_Carro_Troca", "Pontuacao", "Classificacao", "Status", "Origem", "Ultima_Interacao",
    "Vendedor_Responsavel", "Observacoes", "Data_Atualizacao",
)

INTERACTION_COLUMNS = (
    "ID", "Lead_ID", "Telefone", "Data_Hora", "Tipo", "Agente", "Mensagem_Cliente", "Mensagem_Bot",
)

# Chaves de extract_lead_data -> colunas da aba LEADS
FIELD_TO_COLUMN = {
    "nome": "Nome",
    "telefone": "Telefone",
    "email": "Email",
    "tipo_interesse": "Tipo_Interesse",
    "modelo_interesse": "Modelo_Interesse",
    "versao_interesse": "Versao_Interesse",
    "faixa_preco_min": "Faixa_Preco_Min",
    "faixa_preco_max": "Faixa_Preco_Max",
    "prazo_compra": "Prazo_Compra",
    "forma_pagamento": "Forma_Pagamento",
    "tem_carro_troca": "Tem_Carro_Troca",
    "observacoes": "Observacoes",
}

STORE_ERRORS = (GSpreadException, OSError)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def phone_digits(value: Any) -> str:
    """Só os dígitos do telefone (a planilha devolve "+5541..." como número)"""
    return re.sub(r"\D", "", str(value or ""))


def to_columns(data: dict) -> dict:
    """Converte chaves de extração (snake_case) em nomes de coluna"""
    return {FIELD_TO_COLUMN.get(key, key): value for key, value in data.items()}


class SheetsLeadStore:
    """Leads e interações em uma planilha do Google"""

    def __init__(self, spreadsheet: Any):
        """
        Args:
            spreadsheet: gspread.Spreadsheet já aberto

        Raises:
            WorksheetNotFound: abas LEADS ou INTERACOES ausentes
        """
        self.spreadsheet = spreadsheet
        self.leads = spreadsheet.worksheet(LEADS_SHEET)
        self.interactions = spreadsheet.worksheet(INTERACTIONS_SHEET)

    @classmethod
    def connect(cls, current: Settings | None = None) -> Optional["SheetsLeadStore"]:
        """Conecta com a conta de serviço configurada

        Returns:
            SheetsLeadStore, ou None se não configurado ou a conexão falhar
        """
        s = current or default_settings
        if not (s.google_sheets_spreadsheet_id and s.google_service_account_email and s.google_private_key):
            logger.warning("Google Sheets não configurado (variáveis faltando)")
            return None

        logger.info("Conectando ao Google Sheets...")
        try:
            client = gspread.service_account_from_dict({
                "type": "service_account",
                "client_email": s.google_service_account_email,
                "private_key": s.google_private_key,
                "token_uri": "https://oauth2.googleapis.com/token",
            })
            spreadsheet = client.open_by_key(s.google_sheets_spreadsheet_id)
            store = cls(spreadsheet)
        except WorksheetNotFound as e:
            logger.error(f"Abas LEADS ou INTERACOES não encontradas: {e}")
            return None
        except (*STORE_ERRORS, ValueError) as e:
            logger.error(f"Erro ao conectar Google Sheets: {e}")
            return None

        logger.info(f"Planilha conectada: {store.title!r}")
        return store

    @property
    def title(self) -> str:
        return self.spreadsheet.title

    # -------------------------------------------------------------------------
    # Leads
    # -------------------------------------------------------------------------

    def _find_lead(self, phone: str) -> tuple[int, dict] | None:
        """(número da linha na planilha, registro) do lead com esse telefone"""
        target = phone_digits(phone)
        if not target:
            return None
        records = self.leads.get_all_records()
        for index, record in enumerate(records):
            if phone_digits(record.get("Telefone")) == target:
                return index + 2, record  # linha 1 é o cabeçalho
        return None

    def get_lead_by_phone(self, phone: str) -> dict | None:
        try:
            found = self._find_lead(phone)
        except STORE_ERRORS as e:
            logger.error(f"Erro ao buscar lead: {e}")
            return None
        return found[1] if found else None

    def create_lead(self, data: dict) -> int | None:
        """Cria um lead novo e retorna o ID"""
        try:
            new_id = len(self.leads.get_all_records()) + 1
            now = _now()
            values = {column: "" for column in LEAD_COLUMNS}
            values.update({
                "ID": new_id,
                "Data_Cadastro": now,
                "Nome": data.get("nome") or "Novo Contato",
                "Pontuacao": 0,
                "Classificacao": "muito_frio",
                "Status": "novo",
                "Origem": "whatsapp",
                "Ultima_Interacao": now,
                "Data_Atualizacao": now,
            })
            values.update({k: v for k, v in to_columns(data).items() if k in values and k != "Nome"})
            self.leads.append_row([values[c] for c in LEAD_COLUMNS], value_input_option="USER_ENTERED")
        except STORE_ERRORS as e:
            logger.error(f"Erro ao criar lead: {e}")
            return None

        logger.info(f"Lead criado: {new_id} {data.get('telefone')}")
        return new_id

    def update_lead(self, phone: str, updates: dict) -> bool:
        """Atualiza colunas do lead (nomes de coluna ou chaves de extração)"""
        try:
            found = self._find_lead(phone)
            if found is None:
                logger.error(f"Lead não encontrado para atualizar: {phone}")
                return False
            row, _ = found
            header = self.leads.row_values(1)
            now = _now()
            changes = {**to_columns(updates), "Data_Atualizacao": now, "Ultima_Interacao": now}
            cells = [
                gspread.Cell(row, header.index(column) + 1, value)
                for column, value in changes.items()
                if column in header
            ]
            if cells:
                self.leads.update_cells(cells, value_input_option="USER_ENTERED")
        except STORE_ERRORS as e:
            logger.error(f"Erro ao atualizar lead: {e}")
            return False

        logger.debug(f"Lead atualizado: {phone}")
        return True

    # -------------------------------------------------------------------------
    # Interações
    # -------------------------------------------------------------------------

    def log_interaction(
        self,
        lead_id: Any,
        phone: str,
        kind: str,
        agent: str,
        client_message: str = "",
        bot_message: str = "",
    ) -> None:
        """Registra uma mensagem ('entrada' ou 'saida') na aba INTERACOES"""
        try:
            new_id = len(self.interactions.get_all_records()) + 1
            self.interactions.append_row(
                [new_id, lead_id, phone, _now(), kind, agent, client_message or "", bot_message or ""],
                value_input_option="RAW",
            )
        except STORE_ERRORS as e:
            logger.error(f"Erro ao registrar interação: {e}")
            return
        logger.debug(f"Interação registrada: {kind} {phone}")
