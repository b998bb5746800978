# -*- coding: utf-8 -*-
"""
Reservas e lista de espera de um evento da agenda.

Ciclo de vida de uma reserva:

    pendente --confirmar--> confirmada
    pendente --rejeitar---> rejeitada
    pendente | confirmada --cancelar--> cancelada

rejeitada e cancelada são finais. Confirmar e rejeitar cabem ao responsável
pelo anunciante; cancelar, a ele ou ao usuário que fez a reserva.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from vitrii.exceptions import ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from vitrii.models.evento import EventoAgenda
from vitrii.models.reserva import STATUS_ATIVOS, ReservaEvento
from vitrii.models.usuario import Usuario
from vitrii.services.eventos import obter_evento
from vitrii.services.permissoes import eh_responsavel, exigir_responsavel
from vitrii.services.solicitante import Solicitante, SolicitanteAutenticado, colunas_do_solicitante
from vitrii.tempo import agora

logger = logging.getLogger(__name__)

TRANSICOES = {
    "pendente": {"confirmada", "rejeitada", "cancelada"},
    "confirmada": {"cancelada"},
    "rejeitada": set(),
    "cancelada": set(),
}


def _exigir_transicao(reserva: ReservaEvento, novo_status: str) -> None:
    if novo_status not in TRANSICOES.get(reserva.status, set()):
        raise InvalidStateError(
            f"Não é possível alterar a reserva de '{reserva.status}' para '{novo_status}'"
        )


def obter_reserva(db: Session, reserva_id: int) -> ReservaEvento:
    reserva = (
        db.query(ReservaEvento)
        .options(joinedload(ReservaEvento.evento))
        .filter(ReservaEvento.id == reserva_id)
        .first()
    )
    if reserva is None:
        raise NotFoundError("Reserva não encontrada")
    return reserva


def _proxima_posicao(db: Session, evento_id: int) -> int:
    """
    Incrementa o contador do evento e devolve o novo valor.

    O UPDATE trava a linha do evento até o commit da transação que grava a
    reserva, então pedidos simultâneos recebem posições distintas.
    """
    db.execute(
        update(EventoAgenda)
        .where(EventoAgenda.id == evento_id)
        .values(ultima_posicao_lista_espera=EventoAgenda.ultima_posicao_lista_espera + 1)
        .execution_options(synchronize_session=False)
    )
    return db.execute(
        select(EventoAgenda.ultima_posicao_lista_espera).where(EventoAgenda.id == evento_id)
    ).scalar_one()


def criar_reserva(db: Session, evento_id: int, tipo: str, solicitante: Solicitante) -> ReservaEvento:
    evento = obter_evento(db, evento_id)

    if isinstance(solicitante, SolicitanteAutenticado):
        existente = (
            db.query(ReservaEvento)
            .filter(
                ReservaEvento.evento_id == evento.id,
                ReservaEvento.usuario_id == solicitante.usuario_id,
                ReservaEvento.status.in_(STATUS_ATIVOS),
            )
            .first()
        )
        if existente is not None:
            raise ValidationError("Você já possui uma reserva para este evento")

    try:
        posicao = _proxima_posicao(db, evento.id) if tipo == "lista_espera" else None
        reserva = ReservaEvento(
            evento_id=evento.id,
            tipo=tipo,
            status="pendente",
            posicao_lista_espera=posicao,
            **colunas_do_solicitante(solicitante),
        )
        db.add(reserva)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(reserva)
    logger.info(
        "Reserva %s (%s) criada para o evento %s, posição %s", reserva.id, tipo, evento.id, posicao
    )
    return reserva


def confirmar_reserva(db: Session, reserva_id: int, usuario: Optional[Usuario]) -> ReservaEvento:
    reserva = obter_reserva(db, reserva_id)
    exigir_responsavel(
        db, usuario, reserva.evento.anunciante_id, "Acesso negado. Você não é o responsável por este evento."
    )
    _exigir_transicao(reserva, "confirmada")

    reserva.status = "confirmada"
    reserva.data_confirmacao = agora()
    db.commit()
    db.refresh(reserva)
    logger.info("Reserva %s confirmada por usuário %s", reserva.id, usuario.id)
    return reserva


def rejeitar_reserva(db: Session, reserva_id: int, usuario: Optional[Usuario], motivo: Optional[str]) -> ReservaEvento:
    reserva = obter_reserva(db, reserva_id)
    exigir_responsavel(
        db, usuario, reserva.evento.anunciante_id, "Acesso negado. Você não é o responsável por este evento."
    )
    motivo = (motivo or "").strip()
    if not motivo:
        raise ValidationError("Motivo da rejeição é obrigatório")
    _exigir_transicao(reserva, "rejeitada")

    reserva.status = "rejeitada"
    reserva.motivo = motivo
    db.commit()
    db.refresh(reserva)
    logger.info("Reserva %s rejeitada por usuário %s", reserva.id, usuario.id)
    return reserva


def cancelar_reserva(db: Session, reserva_id: int, usuario: Optional[Usuario]) -> ReservaEvento:
    reserva = obter_reserva(db, reserva_id)
    eh_solicitante = usuario is not None and reserva.usuario_id == usuario.id
    if not eh_solicitante and not eh_responsavel(db, usuario, reserva.evento.anunciante_id):
        raise ForbiddenError("Acesso negado. Você não pode cancelar esta reserva.")
    _exigir_transicao(reserva, "cancelada")

    reserva.status = "cancelada"
    reserva.data_cancelamento = agora()
    db.commit()
    db.refresh(reserva)
    logger.info("Reserva %s cancelada por usuário %s", reserva.id, usuario.id)
    return reserva


def listar_reservas_do_evento(db: Session, evento_id: int, usuario: Optional[Usuario]) -> List[ReservaEvento]:
    evento = obter_evento(db, evento_id)
    exigir_responsavel(db, usuario, evento.anunciante_id, "Acesso negado. Você não é o responsável por este evento.")
    return (
        db.query(ReservaEvento)
        .options(joinedload(ReservaEvento.usuario))
        .filter(ReservaEvento.evento_id == evento_id)
        .order_by(
            ReservaEvento.tipo.asc(),
            ReservaEvento.posicao_lista_espera.asc(),
            ReservaEvento.data_solicitacao.asc(),
            ReservaEvento.id.asc(),
        )
        .all()
    )


def contar_reservas(db: Session, evento_id: int) -> dict:
    obter_evento(db, evento_id)
    base = db.query(ReservaEvento).filter(
        ReservaEvento.evento_id == evento_id, ReservaEvento.status.in_(STATUS_ATIVOS)
    )
    return {
        "total_reservas": base.filter(ReservaEvento.tipo == "reserva").count(),
        "total_lista_espera": base.filter(ReservaEvento.tipo == "lista_espera").count(),
    }
