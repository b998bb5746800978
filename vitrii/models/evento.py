# vitrii/models/evento.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from vitrii.database import Base
from vitrii.tempo import agora

PRIVACIDADES = ("publico", "privado_usuarios", "privado")
STATUS_EVENTO = ("pendente", "realizado", "pendente_pagamento", "substituicao")
COR_PADRAO = "#3B82F6"


class EventoAgenda(Base):
    __tablename__ = "eventos_agenda"

    id = Column(Integer, primary_key=True, index=True)
    anunciante_id = Column(Integer, ForeignKey("anunciantes.id"), nullable=False, index=True)
    titulo = Column(String(200), nullable=False)
    descricao = Column(Text, nullable=True)
    data_inicio = Column(DateTime, nullable=False)
    data_fim = Column(DateTime, nullable=False)
    privacidade = Column(String(30), nullable=False, default="privado")
    cor = Column(String(7), nullable=False, default=COR_PADRAO)
    status = Column(String(30), nullable=False, default="pendente")

    # Contador da lista de espera: só cresce, posições canceladas não são reaproveitadas
    ultima_posicao_lista_espera = Column(Integer, nullable=False, default=0)

    data_criacao = Column(DateTime, default=agora)

    anunciante = relationship("Anunciante", back_populates="eventos")
    permissoes = relationship("EventoPermissao", back_populates="evento", cascade="all, delete-orphan")
    reservas = relationship("ReservaEvento", back_populates="evento", cascade="all, delete-orphan")
    fila_origem = relationship("FilaEspera", back_populates="evento", uselist=False)


class EventoPermissao(Base):
    """Usuários que enxergam um evento com privacidade 'privado_usuarios'."""
    __tablename__ = "eventos_agenda_permissoes"
    __table_args__ = (UniqueConstraint("evento_id", "usuario_id", name="uq_evento_usuario"),)

    id = Column(Integer, primary_key=True, index=True)
    evento_id = Column(Integer, ForeignKey("eventos_agenda.id"), nullable=False, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)

    evento = relationship("EventoAgenda", back_populates="permissoes")
    usuario = relationship("Usuario")
