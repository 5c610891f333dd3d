"""Testes do CRM (extração, pontuação, planilha e notificação)"""

from unittest.mock import Mock

import pytest
from gspread.exceptions import GSpreadException
from twilio.base.exceptions import TwilioRestException

from consultor.models.agents import InteractionRecord, RouteIdentifier
from consultor.services.crm import (
    LeadService,
    SellerNotifier,
    SheetsLeadStore,
    calculate_score,
    classify_lead,
    extract_lead_data,
)
from consultor.services.crm.sheets_store import LEAD_COLUMNS
from consultor.services.orchestration.lead_record import LeadRecord
from consultor.settings import Settings


class TestExtractLeadData:
    """extract_lead_data"""

    def test_new_car_cash_with_trade_in(self):
        """Modelo, tipo, pagamento, faixa de preço e troca"""
        data = extract_lead_data("Quero um Argo 0km à vista, até 80 mil, tenho carro pra troca", "")
        assert data["modelo_interesse"] == "Argo"
        assert data["tipo_interesse"] == "carros_novos"
        assert data["forma_pagamento"] == "à vista"
        assert data["faixa_preco_max"] == 80000
        assert data["tem_carro_troca"] == "sim"

    def test_used_car_is_not_new(self):
        """'seminovo' não é confundido com 'novo'"""
        data = extract_lead_data("Procuro um seminovo", "")
        assert data["tipo_interesse"] == "seminovos"

    def test_reply_text_counts(self):
        """A resposta do bot também é considerada"""
        data = extract_lead_data("quanto fica?", "A parcela do Pulse em 48x fica em R$ 2.100")
        assert data["modelo_interesse"] == "Pulse"
        assert data["forma_pagamento"] == "financiado"

    def test_deadline(self):
        """Prazo de compra"""
        assert extract_lead_data("preciso urgente", "")["prazo_compra"] == "imediato"
        assert extract_lead_data("compro em 90 dias", "")["prazo_compra"] == "90_dias"

    def test_nothing_found(self):
        """Sem palavras-chave"""
        assert extract_lead_data("bom dia", "Olá!") == {}


class TestScoring:
    """calculate_score / classify_lead"""

    def test_hot_lead(self):
        """Lead completo e com urgência"""
        lead = {
            "Prazo_Compra": "imediato",
            "Faixa_Preco_Min": "60000",
            "Faixa_Preco_Max": "80000",
            "Modelo_Interesse": "Argo",
            "Forma_Pagamento": "à vista",
            "Tem_Carro_Troca": "sim",
        }
        assert calculate_score(lead) == 155
        assert classify_lead(calculate_score(lead)) == "quente"

    def test_empty_lead(self):
        """Lead sem dados"""
        assert calculate_score({}) == 0
        assert classify_lead(0) == "muito_frio"

    @pytest.mark.parametrize("score, expected", [
        (100, "quente"),
        (99, "morno"),
        (60, "morno"),
        (59, "frio"),
        (30, "frio"),
        (29, "muito_frio"),
    ])
    def test_thresholds(self, score, expected):
        """Faixas de classificação"""
        assert classify_lead(score) == expected


class TestSheetsLeadStore:
    """SheetsLeadStore com planilha simulada"""

    def _store(self, records=None):
        spreadsheet = Mock()
        spreadsheet.title = "CRM Globo FIAT"
        leads, interactions = Mock(), Mock()
        spreadsheet.worksheet.side_effect = lambda name: {"LEADS": leads, "INTERACOES": interactions}[name]
        leads.get_all_records.return_value = records or []
        leads.row_values.return_value = list(LEAD_COLUMNS)
        interactions.get_all_records.return_value = []
        return SheetsLeadStore(spreadsheet)

    def test_get_lead_by_phone(self):
        """Busca pelo telefone (números da planilha comparados como texto)"""
        store = self._store([{"ID": 1, "Telefone": 5541999990000}, {"ID": 2, "Telefone": "+5541888"}])
        assert store.get_lead_by_phone("5541999990000")["ID"] == 1
        assert store.get_lead_by_phone("+5541888")["ID"] == 2
        assert store.get_lead_by_phone("000") is None

    def test_numericised_phone_matches_plus_form(self):
        """A planilha converte "+5541..." em número; a busca com "+" ainda encontra"""
        store = self._store([{"ID": 1, "Telefone": "a"}, {"ID": 2, "Telefone": 5541999990000}])

        assert store.get_lead_by_phone("+5541999990000")["ID"] == 2
        assert store.get_lead_by_phone("whatsapp:+55 41 99999-0000")["ID"] == 2
        assert store.get_lead_by_phone("") is None

    def test_created_lead_is_found_again(self):
        """Lead gravado com "+" é atualizado na segunda mensagem, sem duplicar"""
        store = self._store([])
        store.create_lead({"telefone": "+5541999990000"})
        row = store.leads.append_row.call_args.args[0]
        # USER_ENTERED: a planilha devolve o telefone como inteiro
        stored = dict(zip(LEAD_COLUMNS, row), Telefone=5541999990000)
        store.leads.get_all_records.return_value = [stored]

        assert store.update_lead("+5541999990000", {"Pontuacao": 40}) is True

        cells = store.leads.update_cells.call_args.args[0]
        assert all(c.row == 2 for c in cells)
        store.leads.append_row.assert_called_once()

    def test_create_lead(self):
        """Nova linha com valores padrão"""
        store = self._store([{"ID": 1, "Telefone": "x"}])

        new_id = store.create_lead({"telefone": "+5541888", "modelo_interesse": "Pulse"})

        assert new_id == 2
        row = store.leads.append_row.call_args.args[0]
        values = dict(zip(LEAD_COLUMNS, row))
        assert len(row) == len(LEAD_COLUMNS)
        assert values["Nome"] == "Novo Contato"
        assert values["Telefone"] == "+5541888"
        assert values["Modelo_Interesse"] == "Pulse"
        assert values["Classificacao"] == "muito_frio"
        assert values["Origem"] == "whatsapp"

    def test_update_lead(self):
        """Atualiza as células da linha do lead"""
        store = self._store([{"ID": 1, "Telefone": "a"}, {"ID": 2, "Telefone": "+5541888"}])

        assert store.update_lead("+5541888", {"Pontuacao": 70, "modelo_interesse": "Toro"}) is True

        cells = store.leads.update_cells.call_args.args[0]
        by_col = {c.col: c.value for c in cells}
        assert all(c.row == 3 for c in cells)
        assert by_col[LEAD_COLUMNS.index("Pontuacao") + 1] == 70
        assert by_col[LEAD_COLUMNS.index("Modelo_Interesse") + 1] == "Toro"

    def test_update_missing_lead(self):
        """Lead inexistente não é atualizado"""
        store = self._store([])
        assert store.update_lead("+5541888", {"Pontuacao": 70}) is False
        store.leads.update_cells.assert_not_called()

    def test_log_interaction(self):
        """Registro na aba INTERACOES"""
        store = self._store()
        store.log_interaction(2, "+5541888", "entrada", "financing", client_message="oi")

        row = store.interactions.append_row.call_args.args[0]
        assert row[0] == 1
        assert row[1:3] == [2, "+5541888"]
        assert row[4:] == ["entrada", "financing", "oi", ""]

    def test_api_errors_are_logged(self):
        """Falhas da API não propagam"""
        store = self._store()
        store.leads.get_all_records.side_effect = GSpreadException("quota")
        assert store.get_lead_by_phone("+5541888") is None
        assert store.create_lead({"telefone": "+5541888"}) is None

    def test_connect_without_credentials(self):
        """Sem credenciais não conecta"""
        current = Settings(
            _env_file=None,
            google_sheets_spreadsheet_id=None,
            google_service_account_email=None,
            google_private_key=None,
        )
        assert SheetsLeadStore.connect(current) is None


class TestSellerNotifier:
    """SellerNotifier com cliente Twilio simulado"""

    def test_notify(self):
        """Mensagem enviada ao vendedor"""
        client = Mock()
        notifier = SellerNotifier(client, "+14155238886", "whatsapp:+5541977776666")

        ok = notifier.notify_hot_lead({"Nome": "Maria", "Telefone": "+5541888"}, 120)

        assert ok is True
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["from_"] == "whatsapp:+14155238886"
        assert kwargs["to"] == "whatsapp:+5541977776666"
        assert "Maria" in kwargs["body"]
        assert "120" in kwargs["body"]

    def test_twilio_error(self):
        """Erro da Twilio não propaga"""
        client = Mock()
        client.messages.create.side_effect = TwilioRestException(500, "/Messages", "erro")
        notifier = SellerNotifier(client, "+1", "+2")
        assert notifier.notify_hot_lead({}, 100) is False

    def test_disabled_without_credentials(self):
        """Sem credenciais não há notificador"""
        current = Settings(_env_file=None, twilio_account_sid=None, twilio_auth_token=None)
        assert SellerNotifier.from_settings(current) is None


class TestLeadService:
    """LeadService.record_exchange"""

    def _interaction(self, inbound: str, outbound: str = "Claro!") -> InteractionRecord:
        return InteractionRecord(inbound, outbound, RouteIdentifier.NEW_VEHICLES)

    def test_new_hot_lead(self):
        """Lead novo, quente, com aviso ao vendedor"""
        store, notifier = Mock(), Mock()
        store.get_lead_by_phone.return_value = None
        store.create_lead.return_value = 7
        notifier.notify_hot_lead.return_value = True
        service = LeadService(store, notifier, hot_threshold=100)

        summary = service.record_exchange("+5541888", self._interaction("quero um Argo à vista, urgente"))

        store.create_lead.assert_called_once_with({"telefone": "+5541888"})
        assert store.log_interaction.call_count == 2
        kinds = [c.args[2] for c in store.log_interaction.call_args_list]
        assert kinds == ["entrada", "saida"]
        phone, updates = store.update_lead.call_args.args
        assert phone == "+5541888"
        assert updates["Modelo_Interesse"] == "Argo"
        assert updates["Pontuacao"] == 100
        assert updates["Classificacao"] == "quente"
        notifier.notify_hot_lead.assert_called_once()
        assert summary == {"lead_id": 7, "score": 100, "classification": "quente", "notified": True}

    def test_already_hot_is_not_notified_again(self):
        """Lead que já era quente não gera novo aviso"""
        store, notifier = Mock(), Mock()
        store.get_lead_by_phone.return_value = {"ID": 3, "Telefone": "+5541888", "Classificacao": "quente"}
        service = LeadService(store, notifier)

        summary = service.record_exchange("+5541888", self._interaction("quero um Argo à vista, urgente"))

        notifier.notify_hot_lead.assert_not_called()
        assert summary["notified"] is False
        store.create_lead.assert_not_called()

    def test_cold_lead(self):
        """Conversa sem sinais de compra"""
        store = Mock()
        store.get_lead_by_phone.return_value = {"ID": 4, "Telefone": "+5541888"}
        notifier = Mock()

        summary = LeadService(store, notifier).record_exchange("+5541888", self._interaction("bom dia", "Olá!"))

        assert summary["classification"] == "muito_frio"
        notifier.notify_hot_lead.assert_not_called()

    def test_lead_record_updates_name_and_city(self):
        """Linha do agente de leads preenche nome, interesse e cidade"""
        store = Mock()
        store.get_lead_by_phone.return_value = {"ID": 5, "Telefone": "+5541888"}
        record = LeadRecord(nome="Maria Souza", telefone="+5541888", cidade_uf="Curitiba/PR", interesse="Pulse")

        LeadService(store).record_exchange("+5541888", self._interaction("meu contato"), lead_record=record)

        _, updates = store.update_lead.call_args.args
        assert updates["Nome"] == "Maria Souza"
        assert updates["Tipo_Interesse"] == "Pulse"
        assert "Curitiba/PR" in updates["Observacoes"]

    def test_disabled_without_store(self):
        """Sem planilha o CRM fica desligado"""
        service = LeadService(None)
        assert service.enabled is False
        assert service.record_exchange("+5541888", self._interaction("oi")) is None
