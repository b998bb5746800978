# -*- coding: utf-8 -*-
"""
Schemas Pydantic para o Pagamento Pix de anúncios.
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field

from vitrii.schemas.comum import VitriiSchema

StatusPagamento = Literal["pendente", "processando", "pago", "cancelado", "expirado"]


class PagamentoCreate(VitriiSchema):
    anuncio_id: int = Field(..., gt=0)
    valor: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)


class PagamentoStatusUpdate(VitriiSchema):
    status: StatusPagamento
    pix_id: Optional[str] = None
    erro_msg: Optional[str] = None
    data_pagamento: Optional[datetime] = None


class RejeicaoPagamentoRequest(VitriiSchema):
    motivo: Optional[str] = None


class PagamentoRead(VitriiSchema):
    id: int
    anuncio_id: int
    valor: Decimal
    tipo: str
    # status observado agora (pendente vencido aparece como expirado)
    status: str
    status_registrado: str
    pix_id: Optional[str] = None
    qr_code: Optional[str] = None
    url_copia_e_cola: Optional[str] = None
    data_expiracao: Optional[datetime] = None
    data_pagamento: Optional[datetime] = None
    erro_msg: Optional[str] = None
    data_criacao: Optional[datetime] = None

    @classmethod
    def from_pagamento(cls, pagamento, momento=None):
        status = pagamento.status_em(momento) if momento is not None else pagamento.status_efetivo
        return cls(
            id=pagamento.id,
            anuncio_id=pagamento.anuncio_id,
            valor=pagamento.valor,
            tipo=pagamento.tipo,
            status=status,
            status_registrado=pagamento.status,
            pix_id=pagamento.pix_id,
            qr_code=pagamento.qr_code,
            url_copia_e_cola=pagamento.url_copia_e_cola,
            data_expiracao=pagamento.data_expiracao,
            data_pagamento=pagamento.data_pagamento,
            erro_msg=pagamento.erro_msg,
            data_criacao=pagamento.data_criacao,
        )
