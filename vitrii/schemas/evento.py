# vitrii/schemas/evento.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from vitrii.schemas.comum import VitriiSchema

Privacidade = Literal["publico", "privado_usuarios", "privado"]
StatusEvento = Literal["pendente", "realizado", "pendente_pagamento", "substituicao"]

COR_HEX = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"


class EventoCreate(VitriiSchema):
    anunciante_id: int
    titulo: str = Field(..., min_length=1, max_length=200)
    descricao: Optional[str] = None
    data_inicio: datetime
    data_fim: datetime
    privacidade: Privacidade = "privado"
    cor: Optional[str] = Field(None, pattern=COR_HEX)
    usuarios_permitidos: Optional[List[int]] = None


class EventoUpdate(VitriiSchema):
    titulo: Optional[str] = Field(None, min_length=1, max_length=200)
    descricao: Optional[str] = None
    data_inicio: Optional[datetime] = None
    data_fim: Optional[datetime] = None
    privacidade: Optional[Privacidade] = None
    cor: Optional[str] = Field(None, pattern=COR_HEX)
    usuarios_permitidos: Optional[List[int]] = None


class EventoStatusUpdate(VitriiSchema):
    status: StatusEvento


class PermissaoCreate(VitriiSchema):
    usuario_id: int


class PermissaoRead(VitriiSchema):
    usuario_id: int


class EventoResumo(VitriiSchema):
    id: int
    titulo: str
    data_inicio: datetime
    data_fim: datetime


class EventoVisivel(EventoResumo):
    descricao: Optional[str] = None
    privacidade: str
    cor: str


class EventoRead(EventoVisivel):
    anunciante_id: int
    status: str
    data_criacao: Optional[datetime] = None
    permissoes: List[PermissaoRead] = []


class UsuarioDoEvento(VitriiSchema):
    id: int
    nome: str
    email: str
    permissao_id: int


class AgendaRemovida(VitriiSchema):
    eventos_removidos: int
    filas_removidas: int
