# -*- coding: utf-8 -*-
"""
Integração com o Mercado Pago (Pix, Checkout Transparente).

Sem MP_ACCESS_TOKEN configurado (desenvolvimento e testes) o código copia-e-cola
é montado localmente no padrão BR Code, sem cobrança real.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

import mercadopago

from vitrii import config
from vitrii.exceptions import PaymentProviderError

logger = logging.getLogger(__name__)

# status do Mercado Pago -> status do pagamento
STATUS_PROVEDOR = {
    "approved": "pago",
    "rejected": "cancelado",
    "failed": "cancelado",
    "cancelled": "cancelado",
    "in_process": "processando",
    "processing": "processando",
}


@dataclass
class CobrancaPix:
    pix_id: str
    qr_code: str
    url_copia_e_cola: str
    id_externo: Optional[str] = None


def get_sdk():
    if not config.MP_ACCESS_TOKEN:
        return None
    return mercadopago.SDK(config.MP_ACCESS_TOKEN)


def _novo_pix_id() -> str:
    return f"PIX-{int(datetime.now().timestamp() * 1000)}-{uuid.uuid4().hex[:9].upper()}"


def _campo(identificador: str, valor: str) -> str:
    return f"{identificador}{len(valor):02d}{valor}"


def _crc16(payload: str) -> str:
    crc = 0xFFFF
    for byte in payload.encode("utf-8"):
        crc ^= byte << 8
        for _ in range(8):
            crc = ((crc << 1) ^ 0x1021) if crc & 0x8000 else (crc << 1)
            crc &= 0xFFFF
    return f"{crc:04X}"


def montar_br_code(valor: Decimal, txid: str) -> str:
    conta = _campo("00", "br.gov.bcb.pix") + _campo("01", config.PIX_CHAVE)
    payload = (
        _campo("00", "01")
        + _campo("26", conta)
        + _campo("52", "0000")
        + _campo("53", "986")
        + _campo("54", f"{valor:.2f}")
        + _campo("58", "BR")
        + _campo("59", "Vitrii")
        + _campo("60", "SAO PAULO")
        + _campo("62", _campo("05", txid))
        + "6304"
    )
    return payload + _crc16(payload)


def _cobranca_local(valor: Decimal) -> CobrancaPix:
    pix_id = _novo_pix_id()
    txid = pix_id.replace("-", "")[:25]
    codigo = montar_br_code(valor, txid)
    return CobrancaPix(pix_id=pix_id, qr_code=codigo, url_copia_e_cola=codigo)


def create_pix_payment(
    valor: Decimal, descricao: str, external_ref: str, payer_email: str, expira_em: datetime
) -> CobrancaPix:
    """
    Gera a cobrança Pix e devolve os dados para o frontend exibir o QR Code.
    """
    sdk = get_sdk()
    if sdk is None:
        return _cobranca_local(valor)

    request_options = mercadopago.config.RequestOptions()
    request_options.custom_headers = {"x-idempotency-key": str(uuid.uuid4())}

    base_url = config.BACKEND_URL.rstrip("/")
    payment_data = {
        "transaction_amount": float(valor),
        "description": descricao,
        "payment_method_id": "pix",
        "payer": {"email": payer_email},
        "notification_url": f"{base_url}/api/webhooks/pagamentos",
        "external_reference": external_ref,
        "date_of_expiration": expira_em.strftime("%Y-%m-%dT%H:%M:%S.000-00:00"),
    }

    try:
        payment_response = sdk.payment().create(payment_data, request_options)
    except Exception as e:
        logger.error("Erro ao chamar o Mercado Pago: %s", e)
        raise PaymentProviderError("Erro ao gerar código Pix") from e

    payment = payment_response.get("response", {})
    if payment_response.get("status") != 201:
        logger.error("Erro MP Response: %s", payment)
        raise PaymentProviderError(payment.get("message", "Erro ao gerar código Pix"))

    trans_data = payment.get("point_of_interaction", {}).get("transaction_data", {})
    copia_e_cola = trans_data.get("qr_code")
    return CobrancaPix(
        pix_id=_novo_pix_id(),
        qr_code=trans_data.get("qr_code_base64") or copia_e_cola,
        url_copia_e_cola=copia_e_cola,
        id_externo=str(payment.get("id")),
    )


def consultar_status_provedor(id_externo: str) -> Optional[str]:
    """Status atual no Mercado Pago, ou None quando o SDK não está configurado."""
    sdk = get_sdk()
    if sdk is None:
        return None
    try:
        payment_info = sdk.payment().get(id_externo)
    except Exception as e:
        logger.error("Erro ao consultar pagamento %s no Mercado Pago: %s", id_externo, e)
        raise PaymentProviderError("Erro ao consultar pagamento no provedor") from e
    return payment_info.get("response", {}).get("status")
