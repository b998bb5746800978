# vitrii/routes/pagamentos_fastapi.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vitrii.auth import get_admin_user, get_usuario_opcional
from vitrii.database import get_db
from vitrii.models.usuario import Usuario
from vitrii.schemas.comum import Resposta
from vitrii.schemas.pagamento import (
    PagamentoCreate,
    PagamentoRead,
    PagamentoStatusUpdate,
    RejeicaoPagamentoRequest,
    StatusPagamento,
)
from vitrii.services import pagamentos as pagamentos_service

router = APIRouter(tags=["Pagamentos"])


@router.get("", response_model=Resposta[List[PagamentoRead]])
def read_pagamentos(
    status_pagamento: Optional[StatusPagamento] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    admin: Usuario = Depends(get_admin_user),
):
    pagamentos = pagamentos_service.listar_pagamentos(db, admin, status_pagamento)
    return {"data": [PagamentoRead.from_pagamento(p) for p in pagamentos]}


@router.post("", response_model=Resposta[PagamentoRead], status_code=status.HTTP_201_CREATED)
def create_pagamento(
    pagamento: PagamentoCreate,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_pagamento = pagamentos_service.criar_pagamento(db, pagamento.anuncio_id, pagamento.valor, usuario)
    return {"data": PagamentoRead.from_pagamento(db_pagamento), "message": "Código Pix gerado"}


@router.get("/anuncio/{anuncio_id}", response_model=Resposta[PagamentoRead])
def read_pagamento_do_anuncio(
    anuncio_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_pagamento = pagamentos_service.obter_pagamento_por_anuncio(db, anuncio_id, usuario)
    return {"data": PagamentoRead.from_pagamento(db_pagamento)}


@router.get("/{pagamento_id}/status", response_model=Resposta[PagamentoRead])
def read_pagamento_status(
    pagamento_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    """Consultado periodicamente pelo frontend enquanto o QR Code está aberto."""
    db_pagamento = pagamentos_service.consultar_pagamento(db, pagamento_id, usuario)
    return {"data": PagamentoRead.from_pagamento(db_pagamento)}


@router.patch("/{pagamento_id}/status", response_model=Resposta[PagamentoRead])
def update_pagamento_status(
    pagamento_id: int,
    payload: PagamentoStatusUpdate,
    db: Session = Depends(get_db),
    admin: Usuario = Depends(get_admin_user),
):
    db_pagamento = pagamentos_service.atualizar_status_pagamento(
        db,
        pagamento_id,
        payload.status,
        admin,
        pix_id=payload.pix_id,
        erro_msg=payload.erro_msg,
        data_pagamento=payload.data_pagamento,
    )
    return {"data": PagamentoRead.from_pagamento(db_pagamento), "message": "Status do pagamento atualizado"}


@router.patch("/{pagamento_id}/confirmar", response_model=Resposta[PagamentoRead])
def confirmar_pagamento(
    pagamento_id: int,
    db: Session = Depends(get_db),
    admin: Usuario = Depends(get_admin_user),
):
    db_pagamento = pagamentos_service.confirmar_pagamento(db, pagamento_id, admin)
    return {"data": PagamentoRead.from_pagamento(db_pagamento), "message": "Pagamento confirmado e anúncio ativado"}


@router.patch("/{pagamento_id}/rejeitar", response_model=Resposta[PagamentoRead])
def rejeitar_pagamento(
    pagamento_id: int,
    payload: RejeicaoPagamentoRequest,
    db: Session = Depends(get_db),
    admin: Usuario = Depends(get_admin_user),
):
    db_pagamento = pagamentos_service.rejeitar_pagamento(db, pagamento_id, payload.motivo, admin)
    return {"data": PagamentoRead.from_pagamento(db_pagamento), "message": "Pagamento rejeitado"}


@router.delete("/{pagamento_id}/cancel", response_model=Resposta[PagamentoRead])
def cancelar_pagamento(
    pagamento_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_pagamento = pagamentos_service.cancelar_pagamento(db, pagamento_id, usuario)
    return {"data": PagamentoRead.from_pagamento(db_pagamento), "message": "Pagamento cancelado"}
