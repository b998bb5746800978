# -*- coding: utf-8 -*-
"""
Erros de domínio. Cada classe carrega o status HTTP com que é devolvida ao cliente;
a mensagem é exibida ao usuário como está.
"""

from typing import Any, List, Optional


class VitriiError(Exception):
    status_code = 400

    def __init__(self, message: str, details: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(VitriiError):
    """Campos obrigatórios ausentes ou inválidos."""
    status_code = 400


class AuthenticationError(VitriiError):
    status_code = 401


class ForbiddenError(VitriiError):
    """O usuário não é o anunciante responsável nem o solicitante original."""
    status_code = 403


class NotFoundError(VitriiError):
    status_code = 404


class InvalidStateError(VitriiError):
    """Transição de status não permitida a partir do status atual."""
    status_code = 409


class PaymentProviderError(VitriiError):
    status_code = 502
