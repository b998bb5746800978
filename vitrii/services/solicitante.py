# -*- coding: utf-8 -*-
"""
Quem pede uma reserva ou um horário: um usuário logado OU um visitante que
informa nome e email (telefone opcional). Nunca os dois.
"""

from dataclasses import dataclass
from typing import Optional, Union

from vitrii.exceptions import ValidationError


@dataclass(frozen=True)
class SolicitanteAutenticado:
    usuario_id: int


@dataclass(frozen=True)
class SolicitanteAnonimo:
    nome: str
    email: str
    telefone: Optional[str] = None


Solicitante = Union[SolicitanteAutenticado, SolicitanteAnonimo]


def _limpo(valor: Optional[str]) -> Optional[str]:
    if valor is None:
        return None
    valor = valor.strip()
    return valor or None


def criar_solicitante(
    usuario_id: Optional[int] = None,
    nome: Optional[str] = None,
    email: Optional[str] = None,
    telefone: Optional[str] = None,
) -> Solicitante:
    """
    Único ponto onde a identidade do solicitante é decidida.

    Com usuário logado os dados de contato do corpo são ignorados; sem ele,
    nome e email são obrigatórios.
    """
    if usuario_id is not None:
        return SolicitanteAutenticado(usuario_id=usuario_id)

    nome, email = _limpo(nome), _limpo(email)
    if not nome or not email:
        raise ValidationError("Nome e email são obrigatórios para usuários não logados")
    return SolicitanteAnonimo(nome=nome, email=email.lower(), telefone=_limpo(telefone))


def colunas_do_solicitante(solicitante: Solicitante, coluna_usuario: str = "usuario_id") -> dict:
    """Valores das colunas de solicitante para gravar no modelo."""
    if isinstance(solicitante, SolicitanteAutenticado):
        return {
            coluna_usuario: solicitante.usuario_id,
            "nome_solicitante": None,
            "email_solicitante": None,
            "telefone_solicitante": None,
        }
    return {
        coluna_usuario: None,
        "nome_solicitante": solicitante.nome,
        "email_solicitante": solicitante.email,
        "telefone_solicitante": solicitante.telefone,
    }
