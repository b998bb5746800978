# vitrii/routes/pagamentos_mercadopago.py
# -*- coding: utf-8 -*-
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from vitrii.database import get_db
from vitrii.services.pagamentos import processar_webhook
from vitrii.services.pix import consultar_status_provedor

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Webhooks"])


def _processar_notificacao(db: Session, data_id: str, status_informado: Optional[str]):
    # Com o SDK configurado, o status vem sempre do Mercado Pago, nunca da notificação
    status_provedor = consultar_status_provedor(data_id)
    if status_provedor is None:
        status_provedor = status_informado
    return processar_webhook(db, data_id, status_provedor)


@router.post("/pagamentos")
async def handle_mp_webhook(request: Request, db: Session = Depends(get_db)):
    """
    Recebe o aviso do Mercado Pago e atualiza o pagamento no banco.

    Sempre responde 200 para o Mercado Pago não ficar reenviando a notificação.
    A consulta ao SDK e o acesso ao banco rodam fora do event loop.
    """
    params = request.query_params
    topic = params.get("topic") or params.get("type")
    data_id = params.get("id") or params.get("data.id")
    status_informado = params.get("status")

    if not data_id:
        try:
            body = await request.json()
        except ValueError:
            body = {}
        if isinstance(body, dict):
            topic = topic or body.get("type") or body.get("topic")
            data_id = (body.get("data") or {}).get("id") or body.get("id")
            status_informado = status_informado or body.get("status")

    if topic not in (None, "payment") or not data_id:
        return {"status": "ok"}

    try:
        pagamento = await run_in_threadpool(_processar_notificacao, db, str(data_id), status_informado)
    except Exception as e:
        db.rollback()
        logger.error("Erro ao processar webhook do pagamento %s: %s", data_id, e)
        return {"status": "ok", "detail": "handled_with_error"}

    return {"status": "ok", "pagamentoId": pagamento.id if pagamento else None}
