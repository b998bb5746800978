# vitrii/routes/eventos_agenda_fastapi.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vitrii.auth import get_usuario_opcional
from vitrii.database import get_db
from vitrii.models.usuario import Usuario
from vitrii.schemas.comum import Resposta
from vitrii.schemas.evento import (
    EventoCreate,
    EventoRead,
    EventoStatusUpdate,
    EventoUpdate,
    EventoVisivel,
    PermissaoCreate,
    UsuarioDoEvento,
)
from vitrii.schemas.usuario import UsuarioResumo
from vitrii.services import eventos as eventos_service

router = APIRouter(tags=["Agenda - Eventos"])


@router.get("/anunciante/{anunciante_id}", response_model=Resposta[List[EventoRead]])
def read_eventos_do_anunciante(
    anunciante_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    return {"data": eventos_service.listar_eventos_do_anunciante(db, anunciante_id, usuario)}


@router.get("/visiveis/{anunciante_id}", response_model=Resposta[List[EventoVisivel]])
def read_eventos_visiveis(
    anunciante_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    return {"data": eventos_service.listar_eventos_visiveis(db, anunciante_id, usuario)}


@router.get("/usuarios/busca", response_model=Resposta[List[UsuarioResumo]])
def search_usuarios(query: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return {"data": eventos_service.buscar_usuarios(db, query)}


@router.post("", response_model=Resposta[EventoRead], status_code=status.HTTP_201_CREATED)
def create_evento(
    evento: EventoCreate,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_evento = eventos_service.criar_evento(db, evento, usuario)
    return {"data": db_evento, "message": "Evento criado com sucesso"}


@router.put("/{evento_id}", response_model=Resposta[EventoRead])
def update_evento(
    evento_id: int,
    evento: EventoUpdate,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_evento = eventos_service.atualizar_evento(db, evento_id, evento, usuario)
    return {"data": db_evento, "message": "Evento atualizado com sucesso"}


@router.delete("/{evento_id}", response_model=Resposta[None])
def delete_evento(
    evento_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    eventos_service.deletar_evento(db, evento_id, usuario)
    return {"data": None, "message": "Evento deletado com sucesso"}


@router.patch("/{evento_id}/status", response_model=Resposta[EventoRead])
def update_evento_status(
    evento_id: int,
    payload: EventoStatusUpdate,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    db_evento = eventos_service.atualizar_status_evento(db, evento_id, payload.status, usuario)
    return {"data": db_evento, "message": "Status atualizado com sucesso"}


@router.get("/{evento_id}/usuarios", response_model=Resposta[List[UsuarioDoEvento]])
def read_usuarios_do_evento(
    evento_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    return {"data": eventos_service.listar_usuarios_do_evento(db, evento_id, usuario)}


@router.post("/{evento_id}/usuarios", response_model=Resposta[UsuarioDoEvento], status_code=status.HTTP_201_CREATED)
def add_usuario_ao_evento(
    evento_id: int,
    payload: PermissaoCreate,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    permitido = eventos_service.adicionar_usuario_ao_evento(db, evento_id, payload.usuario_id, usuario)
    return {"data": permitido, "message": "Usuário adicionado ao evento"}


@router.delete("/{evento_id}/usuarios/{usuario_id}", response_model=Resposta[None])
def remove_usuario_do_evento(
    evento_id: int,
    usuario_id: int,
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    eventos_service.remover_permissao(db, evento_id, usuario_id, usuario)
    return {"data": None, "message": "Usuário removido do evento"}
