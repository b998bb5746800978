# -*- coding: utf-8 -*-
"""
Regras de autorização da agenda: só o responsável pelo anunciante (vínculo em
usuarios_anunciantes) altera eventos, reservas e filas de espera dele.
"""

from typing import Optional

from sqlalchemy.orm import Session

from vitrii.exceptions import ForbiddenError
from vitrii.models.anunciante import UsuarioAnunciante
from vitrii.models.usuario import Usuario


def eh_responsavel(db: Session, usuario: Optional[Usuario], anunciante_id: int) -> bool:
    if usuario is None:
        return False
    vinculo = (
        db.query(UsuarioAnunciante)
        .filter(UsuarioAnunciante.usuario_id == usuario.id, UsuarioAnunciante.anunciante_id == anunciante_id)
        .first()
    )
    return vinculo is not None


def exigir_responsavel(
    db: Session,
    usuario: Optional[Usuario],
    anunciante_id: int,
    mensagem: str = "Acesso negado. Você não é responsável por este anunciante.",
) -> None:
    if not eh_responsavel(db, usuario, anunciante_id):
        raise ForbiddenError(mensagem)
