# -*- coding: utf-8 -*-
"""
Fila de espera da agenda: pedidos de um horário que ainda não existe.

    pendente --aprovar--> aprovada (cria um evento privado com o mesmo título e período)
    pendente --rejeitar--> rejeitada (motivo obrigatório, sugestão de data/hora opcional)
    pendente --cancelar--> cancelada
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from vitrii.exceptions import ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from vitrii.models.anunciante import Anunciante
from vitrii.models.evento import COR_PADRAO, EventoAgenda
from vitrii.models.fila_espera import FilaEspera
from vitrii.models.usuario import Usuario
from vitrii.schemas.fila_espera import FilaEsperaCreate
from vitrii.services.eventos import validar_periodo
from vitrii.services.permissoes import eh_responsavel, exigir_responsavel
from vitrii.services.solicitante import Solicitante, colunas_do_solicitante
from vitrii.tempo import agora

logger = logging.getLogger(__name__)


def obter_fila(db: Session, fila_id: int) -> FilaEspera:
    fila = db.get(FilaEspera, fila_id)
    if fila is None:
        raise NotFoundError("Fila de espera não encontrada")
    return fila


def _exigir_pendente(fila: FilaEspera, acao: str) -> None:
    if fila.status != "pendente":
        raise InvalidStateError(f"Não é possível {acao} uma fila de espera com status '{fila.status}'")


def criar_fila_espera(db: Session, dados: FilaEsperaCreate, solicitante: Solicitante) -> FilaEspera:
    inicio, fim = validar_periodo(dados.data_inicio, dados.data_fim)
    if db.get(Anunciante, dados.anunciante_alvo_id) is None:
        raise NotFoundError("Anunciante não encontrado")

    fila = FilaEspera(
        anunciante_alvo_id=dados.anunciante_alvo_id,
        titulo=dados.titulo,
        descricao=dados.descricao or None,
        data_inicio=inicio,
        data_fim=fim,
        status="pendente",
        **colunas_do_solicitante(solicitante, coluna_usuario="usuario_solicitante_id"),
    )
    db.add(fila)
    db.commit()
    db.refresh(fila)
    logger.info("Fila de espera %s criada para o anunciante %s", fila.id, fila.anunciante_alvo_id)
    return fila


def _criar_evento_da_fila(db: Session, fila: FilaEspera) -> EventoAgenda:
    evento = EventoAgenda(
        anunciante_id=fila.anunciante_alvo_id,
        titulo=fila.titulo,
        descricao=fila.descricao,
        data_inicio=fila.data_inicio,
        data_fim=fila.data_fim,
        privacidade="privado",
        cor=COR_PADRAO,
        status="pendente",
    )
    db.add(evento)
    db.flush()
    return evento


def aprovar_fila_espera(db: Session, fila_id: int, usuario: Optional[Usuario]) -> FilaEspera:
    """
    Aprova o pedido e cria o evento correspondente na mesma transação:
    ou os dois ficam gravados, ou nenhum.
    """
    fila = obter_fila(db, fila_id)
    exigir_responsavel(db, usuario, fila.anunciante_alvo_id, "Acesso negado. Você não pode aprovar esta fila.")
    _exigir_pendente(fila, "aprovar")

    try:
        evento = _criar_evento_da_fila(db, fila)
        fila.evento_id = evento.id
        fila.status = "aprovada"
        fila.data_resposta = agora()
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Falha ao aprovar a fila de espera %s", fila_id)
        raise

    db.refresh(fila)
    logger.info("Fila de espera %s aprovada por usuário %s, evento %s criado", fila.id, usuario.id, fila.evento_id)
    return fila


def rejeitar_fila_espera(
    db: Session,
    fila_id: int,
    usuario: Optional[Usuario],
    motivo: Optional[str],
    data_sugestao: Optional[date] = None,
    hora_sugestao: Optional[str] = None,
) -> FilaEspera:
    fila = obter_fila(db, fila_id)
    exigir_responsavel(db, usuario, fila.anunciante_alvo_id, "Acesso negado. Você não pode rejeitar esta fila.")
    motivo = (motivo or "").strip()
    if not motivo:
        raise ValidationError("Motivo da rejeição é obrigatório")
    _exigir_pendente(fila, "rejeitar")

    # A sugestão é só informativa; não é conferida contra a agenda
    fila.status = "rejeitada"
    fila.motivo_rejeicao = motivo
    fila.data_sugestao = data_sugestao
    fila.hora_sugestao = hora_sugestao
    fila.data_resposta = agora()
    db.commit()
    db.refresh(fila)
    logger.info("Fila de espera %s rejeitada por usuário %s", fila.id, usuario.id)
    return fila


def cancelar_fila_espera(db: Session, fila_id: int, usuario: Optional[Usuario]) -> FilaEspera:
    fila = obter_fila(db, fila_id)
    eh_solicitante = usuario is not None and fila.usuario_solicitante_id == usuario.id
    if not eh_solicitante and not eh_responsavel(db, usuario, fila.anunciante_alvo_id):
        raise ForbiddenError("Acesso negado. Você não pode cancelar esta fila.")
    _exigir_pendente(fila, "cancelar")

    fila.status = "cancelada"
    fila.data_resposta = agora()
    db.commit()
    db.refresh(fila)
    logger.info("Fila de espera %s cancelada por usuário %s", fila.id, usuario.id)
    return fila


def listar_filas_para_anunciante(
    db: Session, anunciante_id: int, usuario: Optional[Usuario], status: Optional[str] = None
) -> dict:
    """Pedidos recebidos pelo anunciante, separados em pendentes e histórico."""
    exigir_responsavel(db, usuario, anunciante_id)
    query = (
        db.query(FilaEspera)
        .options(joinedload(FilaEspera.usuario_solicitante), joinedload(FilaEspera.evento))
        .filter(FilaEspera.anunciante_alvo_id == anunciante_id)
    )
    if status:
        query = query.filter(FilaEspera.status == status)
    filas = query.order_by(FilaEspera.data_solicitacao.desc(), FilaEspera.id.desc()).all()
    return {
        "pendentes": [f for f in filas if f.status == "pendente"],
        "historico": [f for f in filas if f.status != "pendente"],
    }


def listar_filas_do_usuario(db: Session, usuario: Usuario) -> List[FilaEspera]:
    return (
        db.query(FilaEspera)
        .options(joinedload(FilaEspera.evento))
        .filter(FilaEspera.usuario_solicitante_id == usuario.id)
        .order_by(FilaEspera.data_solicitacao.desc(), FilaEspera.id.desc())
        .all()
    )
