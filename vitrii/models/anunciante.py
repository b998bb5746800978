# vitrii/models/anunciante.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from vitrii.database import Base
from vitrii.tempo import agora


class Anunciante(Base):
    __tablename__ = "anunciantes"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(150), nullable=False)
    email = Column(String(255), nullable=True)
    data_criacao = Column(DateTime, default=agora)

    usuarios = relationship("UsuarioAnunciante", back_populates="anunciante", cascade="all, delete-orphan")
    eventos = relationship("EventoAgenda", back_populates="anunciante", cascade="all, delete-orphan")


class UsuarioAnunciante(Base):
    """Vínculo que torna o usuário responsável pelo anunciante (e pela sua agenda)."""
    __tablename__ = "usuarios_anunciantes"
    __table_args__ = (UniqueConstraint("usuario_id", "anunciante_id", name="uq_usuario_anunciante"),)

    id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    anunciante_id = Column(Integer, ForeignKey("anunciantes.id"), nullable=False, index=True)
    papel = Column(String(30), default="responsavel")

    usuario = relationship("Usuario", back_populates="anunciantes")
    anunciante = relationship("Anunciante", back_populates="usuarios")
