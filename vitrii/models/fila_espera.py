# vitrii/models/fila_espera.py
from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from vitrii.database import Base
from vitrii.tempo import agora

STATUS_FILA = ("pendente", "aprovada", "rejeitada", "cancelada")


class FilaEspera(Base):
    """
    Pedido de um horário que ainda não existe na agenda do anunciante.
    Ao ser aprovado vira um evento privado (evento_id passa a apontar para ele).
    """
    __tablename__ = "filas_espera_agenda"
    __table_args__ = (
        CheckConstraint(
            "(usuario_solicitante_id IS NOT NULL AND nome_solicitante IS NULL AND email_solicitante IS NULL) OR "
            "(usuario_solicitante_id IS NULL AND nome_solicitante IS NOT NULL AND email_solicitante IS NOT NULL)",
            name="ck_fila_solicitante",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    anunciante_alvo_id = Column(Integer, ForeignKey("anunciantes.id"), nullable=False, index=True)
    usuario_solicitante_id = Column(Integer, ForeignKey("usuarios.id"), nullable=True, index=True)
    nome_solicitante = Column(String(150), nullable=True)
    email_solicitante = Column(String(255), nullable=True)
    telefone_solicitante = Column(String(30), nullable=True)

    titulo = Column(String(200), nullable=False)
    descricao = Column(Text, nullable=True)
    data_inicio = Column(DateTime, nullable=False)
    data_fim = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default="pendente")

    evento_id = Column(Integer, ForeignKey("eventos_agenda.id", ondelete="SET NULL"), nullable=True, unique=True)

    motivo_rejeicao = Column(Text, nullable=True)
    data_sugestao = Column(Date, nullable=True)
    hora_sugestao = Column(String(5), nullable=True)  # HH:mm

    data_solicitacao = Column(DateTime, default=agora)
    data_resposta = Column(DateTime, nullable=True)

    anunciante_alvo = relationship("Anunciante")
    usuario_solicitante = relationship("Usuario")
    evento = relationship("EventoAgenda", back_populates="fila_origem")
