# vitrii/routes/agenda_fastapi.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from vitrii.auth import get_usuario_opcional
from vitrii.database import get_db
from vitrii.models.usuario import Usuario
from vitrii.schemas.comum import Resposta
from vitrii.schemas.evento import AgendaRemovida
from vitrii.services.eventos import deletar_agenda

router = APIRouter(tags=["Agenda"])


@router.delete("/{anunciante_id}", response_model=Resposta[AgendaRemovida])
def delete_agenda(
    anunciante_id: int,
    confirmar: bool = Query(False),
    db: Session = Depends(get_db),
    usuario: Optional[Usuario] = Depends(get_usuario_opcional),
):
    removidos = deletar_agenda(db, anunciante_id, usuario, confirmar)
    return {"data": removidos, "message": "Agenda deletada com sucesso"}
