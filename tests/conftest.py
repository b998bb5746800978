import os
import tempfile
from datetime import timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

TEST_DB = Path(tempfile.gettempdir()) / "vitrii_test.db"

# Precisa estar definido antes de importar o app (config lê o ambiente na importação)
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"
os.environ.setdefault("SECRET_KEY", "ci-test-secret")
os.environ["MP_ACCESS_TOKEN"] = ""

from main import app  # noqa: E402
from vitrii.auth import create_access_token, get_password_hash  # noqa: E402
from vitrii.database import Base, SessionLocal, engine  # noqa: E402
from vitrii.models.anunciante import Anunciante, UsuarioAnunciante  # noqa: E402
from vitrii.models.anuncio import Anuncio  # noqa: E402
from vitrii.models.evento import EventoAgenda  # noqa: E402
from vitrii.models.usuario import Usuario  # noqa: E402
from vitrii.tempo import agora  # noqa: E402


def user_headers(usuario_id: int) -> dict:
    return {"X-User-Id": str(usuario_id)}


def bearer_headers(usuario_id: int) -> dict:
    token = create_access_token({"sub": str(usuario_id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def prepare_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_usuario(db_session):
    contador = {"n": 0}

    def _make(nome=None, tipo_usuario="comum", senha=None):
        contador["n"] += 1
        usuario = Usuario(
            nome=nome or f"Usuário {contador['n']}",
            email=f"usuario{contador['n']}@teste.com",
            tipo_usuario=tipo_usuario,
            hashed_password=get_password_hash(senha) if senha else None,
        )
        db_session.add(usuario)
        db_session.commit()
        db_session.refresh(usuario)
        return usuario

    return _make


@pytest.fixture
def make_anunciante(db_session):
    def _make(responsavel=None, nome="Studio Teste"):
        anunciante = Anunciante(nome=nome, email="contato@studio.com")
        db_session.add(anunciante)
        db_session.flush()
        if responsavel is not None:
            db_session.add(UsuarioAnunciante(usuario_id=responsavel.id, anunciante_id=anunciante.id))
        db_session.commit()
        db_session.refresh(anunciante)
        return anunciante

    return _make


@pytest.fixture
def make_evento(db_session):
    def _make(anunciante, privacidade="publico", titulo="Aula experimental", horas=48):
        inicio = (agora() + timedelta(hours=horas)).replace(minute=0, second=0, microsecond=0)
        evento = EventoAgenda(
            anunciante_id=anunciante.id,
            titulo=titulo,
            data_inicio=inicio,
            data_fim=inicio + timedelta(hours=1),
            privacidade=privacidade,
        )
        db_session.add(evento)
        db_session.commit()
        db_session.refresh(evento)
        return evento

    return _make


@pytest.fixture
def make_anuncio(db_session):
    def _make(anunciante, status="em_edicao"):
        anuncio = Anuncio(anunciante_id=anunciante.id, titulo="Bicicleta aro 29", status=status)
        db_session.add(anuncio)
        db_session.commit()
        db_session.refresh(anuncio)
        return anuncio

    return _make


@pytest.fixture
def dono(make_usuario):
    return make_usuario(nome="Dono da Agenda")


@pytest.fixture
def anunciante(make_anunciante, dono):
    return make_anunciante(responsavel=dono)
