# vitrii/routes/filas_espera_fastapi.py
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vitrii.auth import get_usuario_atual, get_usuario_opcional
from vitrii.database import get_db
from vitrii.models.usuario import Usuario
from vitrii.schemas.comum import Resposta
from vitrii.schemas.fila_espera import FilaEsperaCreate, FilaEsperaRead, FilasAgrupadas, RejeicaoFilaRequest
from vitrii.services import filas_espera as filas_service
from vitrii.services.solicitante import criar_solicitante

router = APIRouter(tags=["Agenda - Fila de espera"])

StatusFila = Literal["pendente", "aprovada", "rejeitada", "cancelada"]


@router.post("", response_model=Resposta[FilaEsperaRead], status_code=status.HTTP_201_CREATED)
def create_fila_espera(
    fila: FilaEsperaCreate,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    solicitante = criar_solicitante(
        usuario_id=usuario.id if usuario else None,
        nome=fila.nome_solicitante,
        email=fila.email_solicitante,
        telefone=fila.telefone_solicitante,
    )
    db_fila = filas_service.criar_fila_espera(db, fila, solicitante)
    return {"data": db_fila, "message": "Solicitação enviada ao anunciante"}


@router.get("/anunciante/{anunciante_id}", response_model=Resposta[FilasAgrupadas])
def read_filas_do_anunciante(
    anunciante_id: int,
    status_fila: Optional[StatusFila] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    return {"data": filas_service.listar_filas_para_anunciante(db, anunciante_id, usuario, status_fila)}


@router.get("/usuario", response_model=Resposta[List[FilaEsperaRead]])
def read_minhas_filas(db: Session = Depends(get_db), usuario: Usuario = Depends(get_usuario_atual)):
    return {"data": filas_service.listar_filas_do_usuario(db, usuario)}


@router.post("/{fila_id}/aprovar", response_model=Resposta[FilaEsperaRead])
def aprovar_fila_espera(
    fila_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_fila = filas_service.aprovar_fila_espera(db, fila_id, usuario)
    return {"data": db_fila, "message": "Solicitação aprovada e evento criado na agenda"}


@router.post("/{fila_id}/rejeitar", response_model=Resposta[FilaEsperaRead])
def rejeitar_fila_espera(
    fila_id: int,
    payload: RejeicaoFilaRequest,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_fila = filas_service.rejeitar_fila_espera(
        db, fila_id, usuario, payload.motivo, payload.data_sugestao, payload.hora_sugestao
    )
    return {"data": db_fila, "message": "Solicitação rejeitada"}


@router.post("/{fila_id}/cancelar", response_model=Resposta[FilaEsperaRead])
def cancelar_fila_espera(
    fila_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_fila = filas_service.cancelar_fila_espera(db, fila_id, usuario)
    return {"data": db_fila, "message": "Solicitação cancelada"}
