import pytest

from vitrii.exceptions import ValidationError
from vitrii.services.solicitante import (
    SolicitanteAnonimo,
    SolicitanteAutenticado,
    colunas_do_solicitante,
    criar_solicitante,
)


def test_usuario_logado_ignora_dados_de_contato():
    solicitante = criar_solicitante(usuario_id=7, nome="Ana", email="ana@x.com")
    assert solicitante == SolicitanteAutenticado(usuario_id=7)


def test_visitante_com_nome_e_email():
    solicitante = criar_solicitante(nome="  Ana ", email="Ana@X.com", telefone="")
    assert solicitante == SolicitanteAnonimo(nome="Ana", email="ana@x.com", telefone=None)


@pytest.mark.parametrize(
    "nome, email",
    [(None, None), ("Ana", None), (None, "ana@x.com"), ("   ", "ana@x.com"), ("Ana", "  ")],
)
def test_visitante_sem_nome_ou_email(nome, email):
    with pytest.raises(ValidationError) as exc:
        criar_solicitante(nome=nome, email=email)
    assert exc.value.message == "Nome e email são obrigatórios para usuários não logados"


def test_colunas_sao_exclusivas():
    logado = colunas_do_solicitante(SolicitanteAutenticado(usuario_id=3), coluna_usuario="usuario_solicitante_id")
    assert logado == {
        "usuario_solicitante_id": 3,
        "nome_solicitante": None,
        "email_solicitante": None,
        "telefone_solicitante": None,
    }

    visitante = colunas_do_solicitante(SolicitanteAnonimo(nome="Ana", email="ana@x.com", telefone="1199"))
    assert visitante["usuario_id"] is None
    assert visitante["nome_solicitante"] == "Ana"
    assert visitante["telefone_solicitante"] == "1199"
