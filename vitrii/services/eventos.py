# -*- coding: utf-8 -*-
"""
Eventos da agenda do anunciante: criação, edição, permissões de visualização
e as operações do dono da agenda.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from vitrii.exceptions import NotFoundError, ValidationError
from vitrii.models.evento import COR_PADRAO, EventoAgenda, EventoPermissao
from vitrii.models.fila_espera import FilaEspera
from vitrii.models.usuario import Usuario
from vitrii.schemas.evento import EventoCreate, EventoUpdate
from vitrii.services.permissoes import exigir_responsavel
from vitrii.tempo import para_utc

logger = logging.getLogger(__name__)


def validar_periodo(inicio: datetime, fim: datetime) -> Tuple[datetime, datetime]:
    inicio, fim = para_utc(inicio), para_utc(fim)
    if inicio >= fim:
        raise ValidationError("Data de início deve ser antes da data de fim")
    return inicio, fim


def obter_evento(db: Session, evento_id: int) -> EventoAgenda:
    evento = db.get(EventoAgenda, evento_id)
    if evento is None:
        raise NotFoundError("Evento não encontrado")
    return evento


def _substituir_permissoes(db: Session, evento: EventoAgenda, usuarios_ids: Iterable[int]) -> None:
    ids = list(dict.fromkeys(usuarios_ids))
    if ids:
        encontrados = {u.id for u in db.query(Usuario.id).filter(Usuario.id.in_(ids))}
        faltando = [i for i in ids if i not in encontrados]
        if faltando:
            raise NotFoundError(f"Usuário não encontrado: {faltando[0]}")
    evento.permissoes.clear()
    db.flush()
    for usuario_id in ids:
        evento.permissoes.append(EventoPermissao(usuario_id=usuario_id))


def criar_evento(db: Session, dados: EventoCreate, usuario: Optional[Usuario]) -> EventoAgenda:
    exigir_responsavel(db, usuario, dados.anunciante_id)
    inicio, fim = validar_periodo(dados.data_inicio, dados.data_fim)

    evento = EventoAgenda(
        anunciante_id=dados.anunciante_id,
        titulo=dados.titulo,
        descricao=dados.descricao or None,
        data_inicio=inicio,
        data_fim=fim,
        privacidade=dados.privacidade,
        cor=dados.cor or COR_PADRAO,
    )
    try:
        db.add(evento)
        db.flush()
        if dados.privacidade == "privado_usuarios" and dados.usuarios_permitidos:
            _substituir_permissoes(db, evento, dados.usuarios_permitidos)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(evento)
    logger.info("Evento %s criado na agenda do anunciante %s por usuário %s", evento.id, evento.anunciante_id, usuario.id)
    return evento


def atualizar_evento(db: Session, evento_id: int, dados: EventoUpdate, usuario: Optional[Usuario]) -> EventoAgenda:
    evento = obter_evento(db, evento_id)
    exigir_responsavel(db, usuario, evento.anunciante_id, "Acesso negado. Você não pode editar este evento.")

    update_data = dados.model_dump(exclude_unset=True)
    usuarios_permitidos = update_data.pop("usuarios_permitidos", None)

    # Valida o período resultante, mesmo quando só uma das datas muda
    inicio = update_data.get("data_inicio") or evento.data_inicio
    fim = update_data.get("data_fim") or evento.data_fim
    update_data["data_inicio"], update_data["data_fim"] = validar_periodo(inicio, fim)

    for key in ("titulo", "privacidade", "cor"):
        if key in update_data and update_data[key] is None:
            del update_data[key]

    try:
        for key, value in update_data.items():
            setattr(evento, key, value)
        if evento.privacidade == "privado_usuarios" and usuarios_permitidos is not None:
            _substituir_permissoes(db, evento, usuarios_permitidos)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(evento)
    return evento


def deletar_evento(db: Session, evento_id: int, usuario: Optional[Usuario]) -> None:
    evento = obter_evento(db, evento_id)
    exigir_responsavel(db, usuario, evento.anunciante_id, "Acesso negado. Você não pode deletar este evento.")
    # Reservas e permissões vão junto (cascade)
    db.delete(evento)
    db.commit()
    logger.info("Evento %s removido por usuário %s", evento_id, usuario.id)


def atualizar_status_evento(db: Session, evento_id: int, status: str, usuario: Optional[Usuario]) -> EventoAgenda:
    evento = obter_evento(db, evento_id)
    exigir_responsavel(db, usuario, evento.anunciante_id, "Acesso negado. Você não pode atualizar este evento.")
    evento.status = status
    db.commit()
    db.refresh(evento)
    return evento


def listar_eventos_do_anunciante(db: Session, anunciante_id: int, usuario: Optional[Usuario]) -> List[EventoAgenda]:
    """Todos os eventos, de qualquer privacidade: o dono vê tudo."""
    exigir_responsavel(db, usuario, anunciante_id)
    return (
        db.query(EventoAgenda)
        .options(joinedload(EventoAgenda.permissoes))
        .filter(EventoAgenda.anunciante_id == anunciante_id)
        .order_by(EventoAgenda.data_inicio.asc())
        .all()
    )


def listar_eventos_visiveis(db: Session, anunciante_id: int, usuario: Optional[Usuario]) -> List[EventoAgenda]:
    """Eventos públicos e, para o usuário logado, os 'privado_usuarios' em que ele tem permissão."""
    filtro = EventoAgenda.privacidade == "publico"
    if usuario is not None:
        filtro = or_(
            filtro,
            (EventoAgenda.privacidade == "privado_usuarios")
            & EventoAgenda.permissoes.any(EventoPermissao.usuario_id == usuario.id),
        )
    return (
        db.query(EventoAgenda)
        .filter(EventoAgenda.anunciante_id == anunciante_id)
        .filter(filtro)
        .order_by(EventoAgenda.data_inicio.asc())
        .all()
    )


def listar_usuarios_do_evento(db: Session, evento_id: int, usuario: Optional[Usuario]) -> List[dict]:
    evento = obter_evento(db, evento_id)
    exigir_responsavel(db, usuario, evento.anunciante_id, "Acesso negado. Você não pode ver os usuários deste evento.")
    permissoes = (
        db.query(EventoPermissao)
        .options(joinedload(EventoPermissao.usuario))
        .filter(EventoPermissao.evento_id == evento_id)
        .all()
    )
    return [
        {"id": p.usuario.id, "nome": p.usuario.nome, "email": p.usuario.email, "permissao_id": p.id}
        for p in permissoes
    ]


def adicionar_usuario_ao_evento(db: Session, evento_id: int, novo_usuario_id: int, usuario: Optional[Usuario]) -> dict:
    evento = obter_evento(db, evento_id)
    exigir_responsavel(
        db, usuario, evento.anunciante_id, "Acesso negado. Você não pode adicionar usuários a este evento."
    )
    novo_usuario = db.get(Usuario, novo_usuario_id)
    if novo_usuario is None:
        raise NotFoundError("Usuário não encontrado")

    permissao = (
        db.query(EventoPermissao)
        .filter(EventoPermissao.evento_id == evento_id, EventoPermissao.usuario_id == novo_usuario_id)
        .first()
    )
    if permissao is None:
        permissao = EventoPermissao(evento_id=evento_id, usuario_id=novo_usuario_id)
        db.add(permissao)
        db.commit()
        db.refresh(permissao)
    return {"id": novo_usuario.id, "nome": novo_usuario.nome, "email": novo_usuario.email, "permissao_id": permissao.id}


def remover_permissao(db: Session, evento_id: int, usuario_removido_id: int, usuario: Optional[Usuario]) -> None:
    evento = obter_evento(db, evento_id)
    exigir_responsavel(
        db, usuario, evento.anunciante_id, "Acesso negado. Você não pode modificar permissões deste evento."
    )
    db.query(EventoPermissao).filter(
        EventoPermissao.evento_id == evento_id, EventoPermissao.usuario_id == usuario_removido_id
    ).delete(synchronize_session=False)
    db.commit()


def buscar_usuarios(db: Session, query: Optional[str]) -> List[Usuario]:
    termo = (query or "").strip()
    if len(termo) < 2:
        raise ValidationError("Query deve ter pelo menos 2 caracteres")
    padrao = f"%{termo}%"
    return (
        db.query(Usuario)
        .filter(or_(Usuario.nome.ilike(padrao), Usuario.email.ilike(padrao)))
        .order_by(Usuario.nome.asc())
        .limit(10)
        .all()
    )


def deletar_agenda(db: Session, anunciante_id: int, usuario: Optional[Usuario], confirmar: bool) -> dict:
    """
    Remove todos os eventos (com reservas e permissões) e todas as filas de espera
    do anunciante. Irreversível: exige confirmar=True.
    """
    exigir_responsavel(db, usuario, anunciante_id, "Acesso negado. Você não é responsável por esta agenda.")
    if not confirmar:
        raise ValidationError("Confirme a exclusão da agenda (confirmar=true). Esta ação não pode ser desfeita.")

    try:
        filas_removidas = (
            db.query(FilaEspera)
            .filter(FilaEspera.anunciante_alvo_id == anunciante_id)
            .delete(synchronize_session=False)
        )
        eventos = db.query(EventoAgenda).filter(EventoAgenda.anunciante_id == anunciante_id).all()
        for evento in eventos:
            db.delete(evento)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Agenda do anunciante %s deletada por usuário %s: %s eventos, %s filas",
        anunciante_id, usuario.id, len(eventos), filas_removidas,
    )
    return {"eventos_removidos": len(eventos), "filas_removidas": filas_removidas}
