# vitrii/schemas/fila_espera.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from vitrii.schemas.comum import VitriiSchema
from vitrii.schemas.evento import EventoResumo
from vitrii.schemas.usuario import UsuarioResumo

HORA_HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


class FilaEsperaCreate(VitriiSchema):
    anunciante_alvo_id: int
    titulo: str = Field(..., min_length=1, max_length=200)
    descricao: Optional[str] = None
    data_inicio: datetime
    data_fim: datetime
    nome_solicitante: Optional[str] = None
    email_solicitante: Optional[EmailStr] = None
    telefone_solicitante: Optional[str] = None


class RejeicaoFilaRequest(VitriiSchema):
    motivo: Optional[str] = None
    data_sugestao: Optional[date] = None
    hora_sugestao: Optional[str] = Field(None, pattern=HORA_HHMM)


class FilaEsperaRead(VitriiSchema):
    id: int
    anunciante_alvo_id: int
    usuario_solicitante_id: Optional[int] = None
    nome_solicitante: Optional[str] = None
    email_solicitante: Optional[str] = None
    telefone_solicitante: Optional[str] = None
    titulo: str
    descricao: Optional[str] = None
    data_inicio: datetime
    data_fim: datetime
    status: str
    evento_id: Optional[int] = None
    motivo_rejeicao: Optional[str] = None
    data_sugestao: Optional[date] = None
    hora_sugestao: Optional[str] = None
    data_solicitacao: Optional[datetime] = None
    data_resposta: Optional[datetime] = None
    usuario_solicitante: Optional[UsuarioResumo] = None
    evento: Optional[EventoResumo] = None


class FilasAgrupadas(VitriiSchema):
    pendentes: List[FilaEsperaRead]
    historico: List[FilaEsperaRead]
