# vitrii/models/reserva.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from vitrii.database import Base
from vitrii.tempo import agora

TIPOS_RESERVA = ("reserva", "lista_espera")
STATUS_ATIVOS = ("pendente", "confirmada")


class ReservaEvento(Base):
    __tablename__ = "reservas_evento"
    __table_args__ = (
        # Ou o usuário logado, ou o contato informado (nome + email)
        CheckConstraint(
            "(usuario_id IS NOT NULL AND nome_solicitante IS NULL AND email_solicitante IS NULL) OR "
            "(usuario_id IS NULL AND nome_solicitante IS NOT NULL AND email_solicitante IS NOT NULL)",
            name="ck_reserva_solicitante",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    evento_id = Column(Integer, ForeignKey("eventos_agenda.id"), nullable=False, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=True, index=True)
    nome_solicitante = Column(String(150), nullable=True)
    email_solicitante = Column(String(255), nullable=True)
    telefone_solicitante = Column(String(30), nullable=True)

    tipo = Column(String(20), nullable=False)  # reserva, lista_espera
    status = Column(String(20), nullable=False, default="pendente")  # pendente, confirmada, rejeitada, cancelada
    posicao_lista_espera = Column(Integer, nullable=True)
    motivo = Column(Text, nullable=True)

    data_solicitacao = Column(DateTime, default=agora)
    data_confirmacao = Column(DateTime, nullable=True)
    data_cancelamento = Column(DateTime, nullable=True)

    evento = relationship("EventoAgenda", back_populates="reservas")
    usuario = relationship("Usuario")
