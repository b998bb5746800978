# vitrii/routes/reservas_evento_fastapi.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vitrii.auth import get_usuario_opcional
from vitrii.database import get_db
from vitrii.models.usuario import Usuario
from vitrii.schemas.comum import Resposta
from vitrii.schemas.reserva import ContagemReservas, MotivoRequest, ReservaCreate, ReservaRead
from vitrii.services import reservas as reservas_service
from vitrii.services.solicitante import criar_solicitante

router = APIRouter(tags=["Agenda - Reservas"])


@router.post("", response_model=Resposta[ReservaRead], status_code=status.HTTP_201_CREATED)
def create_reserva(
    reserva: ReservaCreate,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    solicitante = criar_solicitante(
        usuario_id=usuario.id if usuario else None,
        nome=reserva.nome_solicitante,
        email=reserva.email_solicitante,
        telefone=reserva.telefone_solicitante,
    )
    db_reserva = reservas_service.criar_reserva(db, reserva.evento_id, reserva.tipo, solicitante)
    if db_reserva.tipo == "lista_espera":
        mensagem = f"Você entrou na lista de espera na posição {db_reserva.posicao_lista_espera}"
    else:
        mensagem = "Reserva solicitada com sucesso"
    return {"data": db_reserva, "message": mensagem}


@router.get("/{evento_id}", response_model=Resposta[List[ReservaRead]])
def read_reservas_do_evento(
    evento_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    return {"data": reservas_service.listar_reservas_do_evento(db, evento_id, usuario)}


@router.get("/{evento_id}/count", response_model=Resposta[ContagemReservas])
def count_reservas(evento_id: int, db: Session = Depends(get_db)):
    return {"data": reservas_service.contar_reservas(db, evento_id)}


@router.patch("/{reserva_id}/confirmar", response_model=Resposta[ReservaRead])
def confirmar_reserva(
    reserva_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_reserva = reservas_service.confirmar_reserva(db, reserva_id, usuario)
    return {"data": db_reserva, "message": "Reserva confirmada"}


@router.patch("/{reserva_id}/rejeitar", response_model=Resposta[ReservaRead])
def rejeitar_reserva(
    reserva_id: int,
    payload: MotivoRequest,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_reserva = reservas_service.rejeitar_reserva(db, reserva_id, usuario, payload.motivo)
    return {"data": db_reserva, "message": "Reserva rejeitada"}


@router.patch("/{reserva_id}/cancelar", response_model=Resposta[ReservaRead])
def cancelar_reserva(
    reserva_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_reserva = reservas_service.cancelar_reserva(db, reserva_id, usuario)
    return {"data": db_reserva, "message": "Reserva cancelada"}
