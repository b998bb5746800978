# -*- coding: utf-8 -*-
"""
Pagamento Pix da publicação de um anúncio.

    pendente --> processando --> pago | cancelado | expirado
    pendente --> pago | cancelado | expirado

"expirado" normalmente não é gravado: é o status efetivo de um pagamento
pendente/processando cuja data_expiracao já passou (ver Pagamento.status_em).
"""

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from vitrii import config
from vitrii.exceptions import ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from vitrii.models.anuncio import Anuncio
from vitrii.models.pagamento import STATUS_EXPIRAVEIS, Pagamento
from vitrii.models.usuario import Usuario
from vitrii.services.pix import STATUS_PROVEDOR, create_pix_payment
from vitrii.services.permissoes import eh_responsavel
from vitrii.tempo import agora

logger = logging.getLogger(__name__)

TRANSICOES = {
    "pendente": {"processando", "pago", "cancelado", "expirado"},
    "processando": {"pago", "cancelado", "expirado"},
    "pago": set(),
    "cancelado": set(),
    "expirado": set(),
}


def _exigir_dono_ou_admin(db: Session, usuario: Optional[Usuario], anuncio: Anuncio) -> None:
    if usuario is not None and usuario.is_admin:
        return
    if not eh_responsavel(db, usuario, anuncio.anunciante_id):
        raise ForbiddenError("Acesso negado. Você não é o responsável por este anúncio.")


def _exigir_admin(usuario: Optional[Usuario]) -> None:
    if usuario is None or not usuario.is_admin:
        raise ForbiddenError("Acesso restrito a administradores")


def obter_anuncio(db: Session, anuncio_id: int) -> Anuncio:
    anuncio = db.get(Anuncio, anuncio_id)
    if anuncio is None:
        raise NotFoundError("Anúncio não encontrado")
    return anuncio


def obter_pagamento(db: Session, pagamento_id: int) -> Pagamento:
    pagamento = db.get(Pagamento, pagamento_id)
    if pagamento is None:
        raise NotFoundError("Pagamento não encontrado")
    return pagamento


def obter_pagamento_por_anuncio(db: Session, anuncio_id: int, usuario: Optional[Usuario]) -> Pagamento:
    anuncio = obter_anuncio(db, anuncio_id)
    _exigir_dono_ou_admin(db, usuario, anuncio)
    pagamento = db.query(Pagamento).filter(Pagamento.anuncio_id == anuncio_id).first()
    if pagamento is None:
        raise NotFoundError("Pagamento não encontrado para este anúncio")
    return pagamento


def consultar_pagamento(db: Session, pagamento_id: int, usuario: Optional[Usuario]) -> Pagamento:
    pagamento = obter_pagamento(db, pagamento_id)
    _exigir_dono_ou_admin(db, usuario, pagamento.anuncio)
    return pagamento


def criar_pagamento(
    db: Session,
    anuncio_id: int,
    valor: Decimal,
    usuario: Optional[Usuario],
) -> Pagamento:
    """
    Gera a cobrança Pix e coloca o anúncio aguardando pagamento.

    Um pagamento anterior só é substituído se já estiver cancelado ou expirado.
    """
    momento = agora()
    anuncio = obter_anuncio(db, anuncio_id)
    _exigir_dono_ou_admin(db, usuario, anuncio)
    if valor is None or valor <= 0:
        raise ValidationError("Valor do pagamento deve ser maior que zero")
    anterior = db.query(Pagamento).filter(Pagamento.anuncio_id == anuncio.id).first()
    substituivel = anterior is not None and anterior.status_em(momento) in ("cancelado", "expirado")
    # Pix vencido não é gravado, então o anúncio continua "aguardando_pagamento"
    if anuncio.status != "em_edicao" and not (anuncio.status == "aguardando_pagamento" and substituivel):
        raise InvalidStateError(f"Anúncio com status '{anuncio.status}' não pode gerar pagamento")
    if anterior is not None and not substituivel:
        raise InvalidStateError("Já existe um pagamento em andamento para este anúncio")

    expira_em = momento + timedelta(minutes=config.PIX_EXPIRACAO_MINUTOS)
    cobranca = create_pix_payment(
        valor=valor,
        descricao=f"Publicação do anúncio: {anuncio.titulo}",
        external_ref=f"anuncio_{anuncio.id}",
        payer_email=(usuario.email if usuario is not None else None) or config.PIX_EMAIL_PAGADOR_PADRAO,
        expira_em=expira_em,
    )

    try:
        # O pagamento cancelado/expirado é reaproveitado (um pagamento por anúncio)
        pagamento = anterior or Pagamento(anuncio_id=anuncio.id)
        pagamento.valor = valor
        pagamento.tipo = "pix"
        pagamento.status = "pendente"
        pagamento.pix_id = cobranca.pix_id
        pagamento.id_externo = cobranca.id_externo
        pagamento.qr_code = cobranca.qr_code
        pagamento.url_copia_e_cola = cobranca.url_copia_e_cola
        pagamento.data_expiracao = expira_em
        pagamento.data_pagamento = None
        pagamento.erro_msg = None
        pagamento.data_criacao = momento
        db.add(pagamento)
        anuncio.status = "aguardando_pagamento"
        anuncio.status_pagamento = "pendente"
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(pagamento)
    logger.info("Pagamento %s criado para o anúncio %s (pix %s)", pagamento.id, anuncio.id, pagamento.pix_id)
    return pagamento


def _aplicar_status(pagamento: Pagamento, status: str, momento: datetime) -> None:
    pagamento.status = status
    anuncio = pagamento.anuncio
    if status == "pago":
        pagamento.data_pagamento = pagamento.data_pagamento or momento
        anuncio.status = "ativo"
        anuncio.status_pagamento = "pago"
    elif status in ("cancelado", "expirado"):
        anuncio.status = "em_edicao"
        anuncio.status_pagamento = status
    else:
        anuncio.status_pagamento = status


def cancelar_pagamento(db: Session, pagamento_id: int, usuario: Optional[Usuario]) -> Pagamento:
    pagamento = obter_pagamento(db, pagamento_id)
    _exigir_dono_ou_admin(db, usuario, pagamento.anuncio)
    momento = agora()
    efetivo = pagamento.status_em(momento)
    if efetivo not in STATUS_EXPIRAVEIS:
        raise InvalidStateError(f"Não é possível cancelar um pagamento com status '{efetivo}'")

    _aplicar_status(pagamento, "cancelado", momento)
    db.commit()
    db.refresh(pagamento)
    logger.info("Pagamento %s cancelado", pagamento.id)
    return pagamento


def confirmar_pagamento(db: Session, pagamento_id: int, usuario: Optional[Usuario]) -> Pagamento:
    """Confirmação manual pelo administrador (também vale para pagamentos vencidos)."""
    _exigir_admin(usuario)
    pagamento = obter_pagamento(db, pagamento_id)
    if pagamento.status == "pago":
        raise InvalidStateError("Pagamento já foi confirmado")

    _aplicar_status(pagamento, "pago", agora())
    pagamento.erro_msg = None
    db.commit()
    db.refresh(pagamento)
    logger.info("Pagamento %s confirmado pelo administrador %s", pagamento.id, usuario.id)
    return pagamento


def rejeitar_pagamento(db: Session, pagamento_id: int, motivo: str, usuario: Optional[Usuario]) -> Pagamento:
    """Rejeição manual pelo administrador; o motivo fica em erro_msg."""
    _exigir_admin(usuario)
    motivo = (motivo or "").strip()
    if not motivo:
        raise ValidationError("Motivo da rejeição é obrigatório")
    pagamento = obter_pagamento(db, pagamento_id)
    if pagamento.status not in STATUS_EXPIRAVEIS:
        raise InvalidStateError(f"Não é possível rejeitar um pagamento com status '{pagamento.status}'")

    pagamento.erro_msg = motivo
    _aplicar_status(pagamento, "cancelado", agora())
    db.commit()
    db.refresh(pagamento)
    logger.info("Pagamento %s rejeitado pelo administrador %s: %s", pagamento.id, usuario.id, motivo)
    return pagamento


def atualizar_status_pagamento(
    db: Session,
    pagamento_id: int,
    status: str,
    usuario: Optional[Usuario],
    pix_id: Optional[str] = None,
    erro_msg: Optional[str] = None,
    data_pagamento: Optional[datetime] = None,
) -> Pagamento:
    _exigir_admin(usuario)
    pagamento = obter_pagamento(db, pagamento_id)
    if status not in TRANSICOES.get(pagamento.status, set()):
        raise InvalidStateError(
            f"Não é possível alterar o pagamento de '{pagamento.status}' para '{status}'"
        )

    if pix_id:
        pagamento.pix_id = pix_id
    if erro_msg is not None:
        pagamento.erro_msg = erro_msg
    if data_pagamento is not None:
        pagamento.data_pagamento = data_pagamento
    _aplicar_status(pagamento, status, agora())
    db.commit()
    db.refresh(pagamento)
    logger.info("Pagamento %s atualizado para '%s' por usuário %s", pagamento.id, status, usuario.id)
    return pagamento


def processar_webhook(db: Session, id_externo: str, status_provedor: Optional[str]) -> Optional[Pagamento]:
    """
    Aplica a notificação do provedor. Notificações de pagamentos desconhecidos,
    status não mapeados ou pagamentos já finalizados são ignoradas.
    """
    novo_status = STATUS_PROVEDOR.get(status_provedor or "")
    if novo_status is None:
        logger.info("Webhook ignorado: status '%s' do pagamento %s", status_provedor, id_externo)
        return None

    pagamento = db.query(Pagamento).filter(Pagamento.id_externo == str(id_externo)).first()
    if pagamento is None:
        logger.warning("Webhook para pagamento desconhecido: %s", id_externo)
        return None
    if novo_status == pagamento.status or novo_status not in TRANSICOES.get(pagamento.status, set()):
        logger.info("Webhook ignorado: pagamento %s já está '%s'", pagamento.id, pagamento.status)
        return None

    _aplicar_status(pagamento, novo_status, agora())
    db.commit()
    db.refresh(pagamento)
    logger.info("Pagamento %s atualizado para '%s' via webhook", pagamento.id, novo_status)
    return pagamento


def listar_pagamentos(db: Session, usuario: Optional[Usuario], status: Optional[str] = None) -> List[Pagamento]:
    """Lista para o painel administrativo; o filtro usa o status efetivo."""
    _exigir_admin(usuario)
    pagamentos = db.query(Pagamento).order_by(Pagamento.data_criacao.desc(), Pagamento.id.desc()).all()
    if status:
        momento = agora()
        pagamentos = [p for p in pagamentos if p.status_em(momento) == status]
    return pagamentos
