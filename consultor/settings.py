"""Gerenciamento de configuração da aplicação

Carrega variáveis de ambiente (e o arquivo .env) para um objeto Settings tipado.
"""

from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Carrega o arquivo .env
load_dotenv()

DEFAULT_FALLBACK_REPLY = (
    "Desculpe, ocorreu um erro ao processar sua mensagem. Por favor, tente novamente."
)


class Settings(BaseSettings):
    """Configurações da aplicação"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Configuração de LLM
    llm_provider: Literal["openai", "anthropic", "dummy"] = Field(
        default="openai", description="Provedor de LLM (openai | anthropic | dummy)"
    )
    openai_api_key: str | None = Field(default=None, description="Chave da API OpenAI")
    anthropic_api_key: str | None = Field(default=None, description="Chave da API Anthropic")

    # Modelos por estágio
    openai_model_classifier: str = Field(
        default="gpt-4.1-mini", description="Modelo do classificador de rotas"
    )
    openai_model_responder: str = Field(
        default="gpt-4.1-mini", description="Modelo padrão dos responders"
    )
    openai_model_reasoning: str = Field(
        default="gpt-5", description="Modelo de raciocínio (garantia, revisão, test drive)"
    )
    anthropic_model: str = Field(default="claude-sonnet-4-5", description="Modelo Anthropic")
    llm_timeout_seconds: float = Field(default=30.0, description="Timeout por chamada de modelo")
    llm_max_tool_rounds: int = Field(
        default=4, description="Máximo de rodadas de function calling por responder"
    )

    # Ferramentas
    file_search_vector_store_ids: list[str] = Field(
        default_factory=lambda: ["vs_68f38f958ec4819192ceba6911639b42"],
        description="Vector stores com a tabela de preços/financiamento",
    )
    new_vehicles_domain: str = Field(
        default="globofiat.com.br", description="Único domínio aceito para carros novos"
    )
    used_vehicles_domain: str = Field(
        default="globoseminovos.com.br", description="Único domínio aceito para seminovos"
    )
    dealer_whatsapp: str = Field(
        default="+55 41 3153-4353", description="WhatsApp oficial da loja"
    )

    # Twilio
    twilio_account_sid: str | None = Field(default=None, description="Twilio Account SID")
    twilio_auth_token: str | None = Field(default=None, description="Twilio Auth Token")
    twilio_whatsapp_from: str | None = Field(
        default=None, description="Remetente WhatsApp (ex.: whatsapp:+14155238886)"
    )
    seller_whatsapp: str | None = Field(
        default=None, description="WhatsApp do vendedor que recebe alertas de lead quente"
    )

    # Google Sheets
    google_sheets_spreadsheet_id: str | None = Field(default=None, description="ID da planilha")
    google_service_account_email: str | None = Field(
        default=None, description="E-mail da conta de serviço"
    )
    google_private_key: str | None = Field(
        default=None, description="Chave privada da conta de serviço"
    )

    # App
    app_debug: bool = Field(default=False, description="Modo debug")
    log_level: str = Field(default="INFO", description="Nível de log")
    host: str = Field(default="0.0.0.0", description="Host do servidor HTTP")
    port: int = Field(default=3000, description="Porta do servidor HTTP")
    fallback_reply: str = Field(
        default=DEFAULT_FALLBACK_REPLY, description="Resposta padrão quando o fluxo falha"
    )
    hot_lead_threshold: int = Field(
        default=100, description="Pontuação a partir da qual o vendedor é notificado"
    )

    @field_validator("google_private_key")
    @classmethod
    def _unescape_private_key(cls, value: str | None) -> str | None:
        # Chaves vindas de .env costumam ter "\n" literais
        if value:
            return value.replace("\\n", "\n")
        return value


# Instância global de configuração
settings = Settings()


def validate_settings(current: Settings | None = None) -> dict[str, str]:
    """Valida as configurações e retorna mensagens de aviso

    Args:
        current: Settings a validar (None usa a instância global)

    Returns:
        Dicionário {área: aviso}; vazio quando tudo está configurado
    """
    current = current or settings
    warnings = {}

    # Validação do LLM
    if current.llm_provider == "openai":
        if not current.openai_api_key:
            warnings["llm"] = "Para usar a API da OpenAI é preciso definir OPENAI_API_KEY."
    elif current.llm_provider == "anthropic":
        if not current.anthropic_api_key:
            warnings["llm"] = "Para usar a API da Anthropic é preciso definir ANTHROPIC_API_KEY."

    # Validação do Google Sheets
    sheets_fields = (
        current.google_sheets_spreadsheet_id,
        current.google_service_account_email,
        current.google_private_key,
    )
    if not all(sheets_fields):
        warnings["sheets"] = (
            "Google Sheets não configurado: defina GOOGLE_SHEETS_SPREADSHEET_ID, "
            "GOOGLE_SERVICE_ACCOUNT_EMAIL e GOOGLE_PRIVATE_KEY."
        )

    # Validação do Twilio (notificação de vendedor)
    twilio_fields = (
        current.twilio_account_sid,
        current.twilio_auth_token,
        current.twilio_whatsapp_from,
        current.seller_whatsapp,
    )
    if not all(twilio_fields):
        warnings["twilio"] = (
            "Notificação de vendedor desabilitada: faltam credenciais Twilio "
            "ou SELLER_WHATSAPP."
        )

    return warnings
