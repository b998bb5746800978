# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para o pagamento Pix da publicação de um anúncio.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from vitrii.database import Base
from vitrii.tempo import agora

STATUS_PAGAMENTO = ("pendente", "processando", "pago", "cancelado", "expirado")
STATUS_EXPIRAVEIS = ("pendente", "processando")


class Pagamento(Base):
    __tablename__ = "pagamentos"

    id = Column(Integer, primary_key=True, index=True)
    anuncio_id = Column(Integer, ForeignKey("anuncios.id"), nullable=False, unique=True, index=True)
    valor = Column(Numeric(10, 2), nullable=False)
    tipo = Column(String(20), nullable=False, default="pix")
    status = Column(String(20), nullable=False, default="pendente")

    pix_id = Column(String(100), nullable=True)
    id_externo = Column(String(100), nullable=True, index=True)  # id do pagamento no Mercado Pago
    qr_code = Column(Text, nullable=True)
    url_copia_e_cola = Column(Text, nullable=True)

    data_expiracao = Column(DateTime, nullable=True)
    data_pagamento = Column(DateTime, nullable=True)
    erro_msg = Column(Text, nullable=True)
    data_criacao = Column(DateTime, default=agora)

    anuncio = relationship("Anuncio", back_populates="pagamento")

    def status_em(self, momento):
        """Status observado em `momento`: pendente/processando vencidos aparecem como expirado."""
        if self.status in STATUS_EXPIRAVEIS and self.data_expiracao is not None and momento > self.data_expiracao:
            return "expirado"
        return self.status

    @property
    def status_efetivo(self):
        return self.status_em(agora())
