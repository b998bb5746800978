from fastapi import status

from conftest import user_headers


def _reserva_payload(evento_id, tipo="reserva", **extra):
    payload = {"eventoId": evento_id, "tipo": tipo}
    payload.update(extra)
    return payload


def test_reserva_de_visitante_confirmada_pelo_dono(client, anunciante, dono, make_evento):
    evento = make_evento(anunciante)

    resp = client.post(
        "/api/reservas-evento",
        json=_reserva_payload(evento.id, nomeSolicitante="Ana", emailSolicitante="ana@x.com"),
    )
    assert resp.status_code == status.HTTP_201_CREATED
    reserva = resp.json()["data"]
    assert reserva["status"] == "pendente"
    assert reserva["tipo"] == "reserva"
    assert reserva["nomeSolicitante"] == "Ana"
    assert reserva["usuarioId"] is None
    assert reserva["posicaoListaEspera"] is None

    confirm = client.patch(f"/api/reservas-evento/{reserva['id']}/confirmar", headers=user_headers(dono.id))
    assert confirm.status_code == status.HTTP_200_OK
    assert confirm.json()["data"]["status"] == "confirmada"
    assert confirm.json()["data"]["dataConfirmacao"] is not None

    again = client.patch(f"/api/reservas-evento/{reserva['id']}/confirmar", headers=user_headers(dono.id))
    assert again.status_code == status.HTTP_409_CONFLICT
    assert "error" in again.json()


def test_visitante_sem_contato_recebe_400(client, anunciante, make_evento):
    evento = make_evento(anunciante)
    resp = client.post("/api/reservas-evento", json=_reserva_payload(evento.id, nomeSolicitante="Ana"))
    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.json() == {"error": "Nome e email são obrigatórios para usuários não logados"}


def test_tipo_invalido_recebe_dados_invalidos(client, anunciante, make_evento):
    evento = make_evento(anunciante)
    resp = client.post("/api/reservas-evento", json=_reserva_payload(evento.id, tipo="vip"))
    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    body = resp.json()
    assert body["error"] == "Dados inválidos"
    assert body["details"]


def test_evento_inexistente(client):
    resp = client.post(
        "/api/reservas-evento",
        json=_reserva_payload(999, nomeSolicitante="Ana", emailSolicitante="ana@x.com"),
    )
    assert resp.status_code == status.HTTP_404_NOT_FOUND
    assert resp.json()["error"] == "Evento não encontrado"


def test_usuario_logado_nao_duplica_reserva_ativa(client, anunciante, make_evento, make_usuario):
    evento = make_evento(anunciante)
    cliente = make_usuario()

    primeira = client.post("/api/reservas-evento", json=_reserva_payload(evento.id), headers=user_headers(cliente.id))
    assert primeira.status_code == status.HTTP_201_CREATED
    assert primeira.json()["data"]["usuarioId"] == cliente.id
    assert primeira.json()["data"]["nomeSolicitante"] is None

    segunda = client.post("/api/reservas-evento", json=_reserva_payload(evento.id), headers=user_headers(cliente.id))
    assert segunda.status_code == status.HTTP_400_BAD_REQUEST

    client.patch(f"/api/reservas-evento/{primeira.json()['data']['id']}/cancelar", headers=user_headers(cliente.id))
    terceira = client.post("/api/reservas-evento", json=_reserva_payload(evento.id), headers=user_headers(cliente.id))
    assert terceira.status_code == status.HTTP_201_CREATED


def test_lista_de_espera_recebe_posicoes_sequenciais(client, anunciante, make_evento):
    evento = make_evento(anunciante)
    posicoes = []
    for i in range(3):
        resp = client.post(
            "/api/reservas-evento",
            json=_reserva_payload(evento.id, "lista_espera", nomeSolicitante=f"Pessoa {i}", emailSolicitante=f"p{i}@x.com"),
        )
        assert resp.status_code == status.HTTP_201_CREATED
        posicoes.append(resp.json()["data"]["posicaoListaEspera"])
    assert posicoes == [1, 2, 3]


def test_posicao_cancelada_nao_e_reaproveitada(client, anunciante, dono, make_evento):
    evento = make_evento(anunciante)
    primeira = client.post(
        "/api/reservas-evento",
        json=_reserva_payload(evento.id, "lista_espera", nomeSolicitante="A", emailSolicitante="a@x.com"),
    ).json()["data"]
    client.patch(f"/api/reservas-evento/{primeira['id']}/cancelar", headers=user_headers(dono.id))

    segunda = client.post(
        "/api/reservas-evento",
        json=_reserva_payload(evento.id, "lista_espera", nomeSolicitante="B", emailSolicitante="b@x.com"),
    ).json()["data"]
    assert segunda["posicaoListaEspera"] == 2


def test_rejeitar_exige_motivo(client, anunciante, dono, make_evento):
    evento = make_evento(anunciante)
    reserva = client.post(
        "/api/reservas-evento",
        json=_reserva_payload(evento.id, nomeSolicitante="Ana", emailSolicitante="ana@x.com"),
    ).json()["data"]

    sem_motivo = client.patch(
        f"/api/reservas-evento/{reserva['id']}/rejeitar", json={"motivo": "  "}, headers=user_headers(dono.id)
    )
    assert sem_motivo.status_code == status.HTTP_400_BAD_REQUEST
    assert sem_motivo.json()["error"] == "Motivo da rejeição é obrigatório"

    rejeitada = client.patch(
        f"/api/reservas-evento/{reserva['id']}/rejeitar",
        json={"motivo": "Horário indisponível"},
        headers=user_headers(dono.id),
    )
    assert rejeitada.status_code == status.HTTP_200_OK
    assert rejeitada.json()["data"]["status"] == "rejeitada"
    assert rejeitada.json()["data"]["motivo"] == "Horário indisponível"

    cancelar = client.patch(f"/api/reservas-evento/{reserva['id']}/cancelar", headers=user_headers(dono.id))
    assert cancelar.status_code == status.HTTP_409_CONFLICT


def test_somente_dono_confirma(client, anunciante, make_evento, make_usuario):
    evento = make_evento(anunciante)
    intruso = make_usuario()
    reserva = client.post(
        "/api/reservas-evento",
        json=_reserva_payload(evento.id, nomeSolicitante="Ana", emailSolicitante="ana@x.com"),
    ).json()["data"]

    resp = client.patch(f"/api/reservas-evento/{reserva['id']}/confirmar", headers=user_headers(intruso.id))
    assert resp.status_code == status.HTTP_403_FORBIDDEN

    anonimo = client.patch(f"/api/reservas-evento/{reserva['id']}/confirmar")
    assert anonimo.status_code == status.HTTP_403_FORBIDDEN


def test_solicitante_cancela_a_propria_reserva(client, anunciante, make_evento, make_usuario):
    evento = make_evento(anunciante)
    cliente = make_usuario()
    outro = make_usuario()
    reserva = client.post(
        "/api/reservas-evento", json=_reserva_payload(evento.id), headers=user_headers(cliente.id)
    ).json()["data"]

    negado = client.patch(f"/api/reservas-evento/{reserva['id']}/cancelar", headers=user_headers(outro.id))
    assert negado.status_code == status.HTTP_403_FORBIDDEN

    resp = client.patch(f"/api/reservas-evento/{reserva['id']}/cancelar", headers=user_headers(cliente.id))
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["data"]["status"] == "cancelada"
    assert resp.json()["data"]["dataCancelamento"] is not None


def test_reserva_confirmada_pode_ser_cancelada(client, anunciante, dono, make_evento, make_usuario):
    evento = make_evento(anunciante)
    cliente = make_usuario()
    do_cliente = client.post(
        "/api/reservas-evento", json=_reserva_payload(evento.id), headers=user_headers(cliente.id)
    ).json()["data"]
    de_visitante = client.post(
        "/api/reservas-evento",
        json=_reserva_payload(evento.id, nomeSolicitante="Ana", emailSolicitante="ana@x.com"),
    ).json()["data"]

    for reserva in (do_cliente, de_visitante):
        confirm = client.patch(f"/api/reservas-evento/{reserva['id']}/confirmar", headers=user_headers(dono.id))
        assert confirm.json()["data"]["status"] == "confirmada"

    pelo_cliente = client.patch(f"/api/reservas-evento/{do_cliente['id']}/cancelar", headers=user_headers(cliente.id))
    assert pelo_cliente.status_code == status.HTTP_200_OK
    assert pelo_cliente.json()["data"]["status"] == "cancelada"
    assert pelo_cliente.json()["data"]["dataCancelamento"] is not None

    pelo_dono = client.patch(f"/api/reservas-evento/{de_visitante['id']}/cancelar", headers=user_headers(dono.id))
    assert pelo_dono.status_code == status.HTTP_200_OK
    assert pelo_dono.json()["data"]["status"] == "cancelada"
    assert pelo_dono.json()["data"]["dataCancelamento"] is not None

    again = client.patch(f"/api/reservas-evento/{de_visitante['id']}/cancelar", headers=user_headers(dono.id))
    assert again.status_code == status.HTTP_409_CONFLICT


def test_listagem_e_contagem(client, anunciante, dono, make_evento):
    evento = make_evento(anunciante)
    for i, tipo in enumerate(["lista_espera", "reserva", "lista_espera"]):
        client.post(
            "/api/reservas-evento",
            json=_reserva_payload(evento.id, tipo, nomeSolicitante=f"P{i}", emailSolicitante=f"p{i}@x.com"),
        )

    lista = client.get(f"/api/reservas-evento/{evento.id}", headers=user_headers(dono.id))
    assert lista.status_code == status.HTTP_200_OK
    tipos = [(r["tipo"], r["posicaoListaEspera"]) for r in lista.json()["data"]]
    assert tipos == [("lista_espera", 1), ("lista_espera", 2), ("reserva", None)]

    contagem = client.get(f"/api/reservas-evento/{evento.id}/count")
    assert contagem.json()["data"] == {"totalReservas": 1, "totalListaEspera": 2}


def test_listagem_negada_para_quem_nao_e_dono(client, anunciante, make_evento, make_usuario):
    evento = make_evento(anunciante)
    resp = client.get(f"/api/reservas-evento/{evento.id}", headers=user_headers(make_usuario().id))
    assert resp.status_code == status.HTTP_403_FORBIDDEN
