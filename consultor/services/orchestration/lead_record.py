"""Registro de lead emitido pelo captador (uma linha CSV)"""

import csv
import io
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from consultor.prompts.leads import LEAD_CSV_HEADER

LEAD_FIELDS: tuple[str, ...] = tuple(LEAD_CSV_HEADER.split(","))
REQUIRED_FIELDS = ("nome", "telefone", "cidade_uf", "interesse")


class LeadRecord(BaseModel):
    """Lead capturado na conversa, na ordem fixa das colunas"""

    data: str = ""
    nome: str
    telefone: str
    cidade_uf: str
    canal_origem: str = "whatsapp"
    interesse: str
    preferencia_contato: str = ""
    melhor_horario_contato: str = ""
    tem_troca: str = ""
    veiculo_troca: str = ""
    precisa_financiamento: str = ""
    entrada_ou_parcelas: str = ""
    orcamento_estimado: str = ""
    consentimento: str = ""
    pontuacao_prioridade: int = Field(default=50, ge=0, le=100)
    status: str = "novo"
    observacoes: str = ""

    @classmethod
    def from_csv_line(cls, text: str) -> Optional["LeadRecord"]:
        """Interpreta a saída do captador

        Returns:
            LeadRecord, ou None se o texto não for exatamente uma linha CSV válida
        """
        line = (text or "").strip()
        if not line or "\n" in line or line == LEAD_CSV_HEADER:
            return None

        rows = list(csv.reader(io.StringIO(line)))
        if len(rows) != 1 or len(rows[0]) != len(LEAD_FIELDS):
            return None

        values = dict(zip(LEAD_FIELDS, (v.strip() for v in rows[0])))
        if any(not values[name] for name in REQUIRED_FIELDS):
            return None
        if not values["pontuacao_prioridade"]:
            values.pop("pontuacao_prioridade")
        try:
            return cls(**values)
        except ValidationError:
            return None

    def to_csv_line(self) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="")
        writer.writerow([getattr(self, name) for name in LEAD_FIELDS])
        return buffer.getvalue()
