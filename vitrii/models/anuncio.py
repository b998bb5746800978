# vitrii/models/anuncio.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from vitrii.database import Base
from vitrii.tempo import agora


class Anuncio(Base):
    __tablename__ = "anuncios"

    id = Column(Integer, primary_key=True, index=True)
    anunciante_id = Column(Integer, ForeignKey("anunciantes.id"), nullable=False, index=True)
    titulo = Column(String(200), nullable=False)
    status = Column(String(30), nullable=False, default="em_edicao")  # em_edicao, aguardando_pagamento, pago, ativo
    status_pagamento = Column(String(30), nullable=True)
    data_criacao = Column(DateTime, default=agora)

    anunciante = relationship("Anunciante")
    pagamento = relationship("Pagamento", back_populates="anuncio", uselist=False)
