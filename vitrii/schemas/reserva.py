# vitrii/schemas/reserva.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr

from vitrii.schemas.comum import VitriiSchema
from vitrii.schemas.usuario import UsuarioResumo

TipoReserva = Literal["reserva", "lista_espera"]


class ReservaCreate(VitriiSchema):
    evento_id: int
    tipo: TipoReserva
    nome_solicitante: Optional[str] = None
    email_solicitante: Optional[EmailStr] = None
    telefone_solicitante: Optional[str] = None


class MotivoRequest(VitriiSchema):
    motivo: Optional[str] = None


class ReservaRead(VitriiSchema):
    id: int
    evento_id: int
    usuario_id: Optional[int] = None
    nome_solicitante: Optional[str] = None
    email_solicitante: Optional[str] = None
    telefone_solicitante: Optional[str] = None
    tipo: str
    status: str
    posicao_lista_espera: Optional[int] = None
    motivo: Optional[str] = None
    data_solicitacao: Optional[datetime] = None
    data_confirmacao: Optional[datetime] = None
    data_cancelamento: Optional[datetime] = None
    usuario: Optional[UsuarioResumo] = None


class ContagemReservas(VitriiSchema):
    total_reservas: int
    total_lista_espera: int
