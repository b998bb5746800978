from fastapi import status

from conftest import user_headers
from vitrii.models.evento import EventoAgenda
from vitrii.models.fila_espera import FilaEspera
from vitrii.models.reserva import ReservaEvento


def _evento_payload(anunciante_id, **extra):
    payload = {
        "anuncianteId": anunciante_id,
        "titulo": "Aula de yoga",
        "dataInicio": "2030-05-10T09:00:00Z",
        "dataFim": "2030-05-10T10:00:00Z",
    }
    payload.update(extra)
    return payload


def test_criar_evento_com_padroes(client, anunciante, dono):
    resp = client.post("/api/eventos-agenda", json=_evento_payload(anunciante.id), headers=user_headers(dono.id))
    assert resp.status_code == status.HTTP_201_CREATED
    evento = resp.json()["data"]
    assert evento["privacidade"] == "privado"
    assert evento["status"] == "pendente"
    assert evento["cor"] == "#3B82F6"
    assert evento["anuncianteId"] == anunciante.id
    assert resp.json()["message"] == "Evento criado com sucesso"


def test_criar_evento_exige_dono(client, anunciante, make_usuario):
    resp = client.post(
        "/api/eventos-agenda", json=_evento_payload(anunciante.id), headers=user_headers(make_usuario().id)
    )
    assert resp.status_code == status.HTTP_403_FORBIDDEN

    anonimo = client.post("/api/eventos-agenda", json=_evento_payload(anunciante.id))
    assert anonimo.status_code == status.HTTP_403_FORBIDDEN


def test_periodo_invalido(client, anunciante, dono):
    resp = client.post(
        "/api/eventos-agenda",
        json=_evento_payload(anunciante.id, dataFim="2030-05-10T09:00:00Z"),
        headers=user_headers(dono.id),
    )
    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.json()["error"] == "Data de início deve ser antes da data de fim"


def test_atualizar_valida_periodo_resultante(client, anunciante, dono, make_evento):
    evento = make_evento(anunciante)
    resp = client.put(
        f"/api/eventos-agenda/{evento.id}",
        json={"dataFim": evento.data_inicio.isoformat()},
        headers=user_headers(dono.id),
    )
    assert resp.status_code == status.HTTP_400_BAD_REQUEST

    ok = client.put(
        f"/api/eventos-agenda/{evento.id}", json={"titulo": "Novo título", "cor": "#FF0000"}, headers=user_headers(dono.id)
    )
    assert ok.status_code == status.HTTP_200_OK
    assert ok.json()["data"]["titulo"] == "Novo título"
    assert ok.json()["data"]["cor"] == "#FF0000"


def test_cor_invalida(client, anunciante, dono):
    resp = client.post(
        "/api/eventos-agenda", json=_evento_payload(anunciante.id, cor="azul"), headers=user_headers(dono.id)
    )
    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.json()["error"] == "Dados inválidos"


def test_visibilidade(client, anunciante, dono, make_usuario):
    convidado = make_usuario()
    outro = make_usuario()
    headers = user_headers(dono.id)
    client.post("/api/eventos-agenda", json=_evento_payload(anunciante.id, titulo="Aberto", privacidade="publico"), headers=headers)
    client.post("/api/eventos-agenda", json=_evento_payload(anunciante.id, titulo="Fechado"), headers=headers)
    client.post(
        "/api/eventos-agenda",
        json=_evento_payload(
            anunciante.id, titulo="Convidados", privacidade="privado_usuarios", usuariosPermitidos=[convidado.id]
        ),
        headers=headers,
    )

    def titulos(resp):
        return sorted(e["titulo"] for e in resp.json()["data"])

    assert titulos(client.get(f"/api/eventos-agenda/visiveis/{anunciante.id}")) == ["Aberto"]
    assert titulos(
        client.get(f"/api/eventos-agenda/visiveis/{anunciante.id}", headers=user_headers(convidado.id))
    ) == ["Aberto", "Convidados"]
    assert titulos(
        client.get(f"/api/eventos-agenda/visiveis/{anunciante.id}", headers=user_headers(outro.id))
    ) == ["Aberto"]

    todos = client.get(f"/api/eventos-agenda/anunciante/{anunciante.id}", headers=headers)
    assert titulos(todos) == ["Aberto", "Convidados", "Fechado"]

    negado = client.get(f"/api/eventos-agenda/anunciante/{anunciante.id}", headers=user_headers(outro.id))
    assert negado.status_code == status.HTTP_403_FORBIDDEN


def test_permissoes_de_usuarios(client, anunciante, dono, make_evento, make_usuario):
    evento = make_evento(anunciante, privacidade="privado_usuarios")
    convidado = make_usuario(nome="Carla Convidada")
    headers = user_headers(dono.id)

    add = client.post(f"/api/eventos-agenda/{evento.id}/usuarios", json={"usuarioId": convidado.id}, headers=headers)
    assert add.status_code == status.HTTP_201_CREATED
    assert add.json()["data"]["id"] == convidado.id

    # adicionar de novo não duplica
    client.post(f"/api/eventos-agenda/{evento.id}/usuarios", json={"usuarioId": convidado.id}, headers=headers)
    lista = client.get(f"/api/eventos-agenda/{evento.id}/usuarios", headers=headers)
    assert [u["nome"] for u in lista.json()["data"]] == ["Carla Convidada"]

    inexistente = client.post(f"/api/eventos-agenda/{evento.id}/usuarios", json={"usuarioId": 999}, headers=headers)
    assert inexistente.status_code == status.HTTP_404_NOT_FOUND

    remover = client.delete(f"/api/eventos-agenda/{evento.id}/usuarios/{convidado.id}", headers=headers)
    assert remover.status_code == status.HTTP_200_OK
    assert client.get(f"/api/eventos-agenda/{evento.id}/usuarios", headers=headers).json()["data"] == []


def test_busca_de_usuarios(client, make_usuario):
    make_usuario(nome="Marina Souza")
    make_usuario(nome="Mário Lima")
    curta = client.get("/api/eventos-agenda/usuarios/busca", params={"query": "m"})
    assert curta.status_code == status.HTTP_400_BAD_REQUEST

    resp = client.get("/api/eventos-agenda/usuarios/busca", params={"query": "Marina"})
    assert [u["nome"] for u in resp.json()["data"]] == ["Marina Souza"]


def test_status_do_evento(client, anunciante, dono, make_evento):
    evento = make_evento(anunciante)
    resp = client.patch(f"/api/eventos-agenda/{evento.id}/status", json={"status": "realizado"}, headers=user_headers(dono.id))
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["data"]["status"] == "realizado"

    invalido = client.patch(f"/api/eventos-agenda/{evento.id}/status", json={"status": "x"}, headers=user_headers(dono.id))
    assert invalido.status_code == status.HTTP_400_BAD_REQUEST


def test_deletar_evento_remove_reservas(client, anunciante, dono, make_evento, db_session):
    evento = make_evento(anunciante)
    evento_id = evento.id
    client.post(
        "/api/reservas-evento",
        json={"eventoId": evento_id, "tipo": "reserva", "nomeSolicitante": "Ana", "emailSolicitante": "ana@x.com"},
    )
    resp = client.delete(f"/api/eventos-agenda/{evento_id}", headers=user_headers(dono.id))
    assert resp.status_code == status.HTTP_200_OK

    db_session.expire_all()
    assert db_session.query(ReservaEvento).count() == 0
    assert client.delete(f"/api/eventos-agenda/{evento_id}", headers=user_headers(dono.id)).status_code == 404


def test_deletar_agenda(client, anunciante, dono, make_evento, make_anunciante, db_session):
    make_evento(anunciante)
    make_evento(anunciante, titulo="Outra aula")
    outro_anunciante = make_anunciante(nome="Outro")
    make_evento(outro_anunciante)
    client.post(
        "/api/filas-espera",
        json={
            "anuncianteAlvoId": anunciante.id,
            "titulo": "Consulta",
            "dataInicio": "2030-03-01T10:00:00Z",
            "dataFim": "2030-03-01T11:00:00Z",
            "nomeSolicitante": "Ana",
            "emailSolicitante": "ana@x.com",
        },
    )

    sem_confirmar = client.delete(f"/api/agenda/{anunciante.id}", headers=user_headers(dono.id))
    assert sem_confirmar.status_code == status.HTTP_400_BAD_REQUEST

    resp = client.delete(f"/api/agenda/{anunciante.id}", params={"confirmar": "true"}, headers=user_headers(dono.id))
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["data"] == {"eventosRemovidos": 2, "filasRemovidas": 1}

    db_session.expire_all()
    assert db_session.query(EventoAgenda).filter(EventoAgenda.anunciante_id == anunciante.id).count() == 0
    assert db_session.query(EventoAgenda).count() == 1
    assert db_session.query(FilaEspera).count() == 0
