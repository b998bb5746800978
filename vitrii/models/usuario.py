from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from vitrii.database import Base
from vitrii.tempo import agora


class Usuario(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(150), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    telefone = Column(String(30), nullable=True)
    hashed_password = Column(String, nullable=True)
    tipo_usuario = Column(String(20), nullable=False, default="comum")  # adm, comum
    data_criacao = Column(DateTime, default=agora)

    anunciantes = relationship("UsuarioAnunciante", back_populates="usuario", cascade="all, delete-orphan")

    @property
    def is_admin(self):
        return self.tipo_usuario == "adm"
