import threading

from vitrii.database import SessionLocal
from vitrii.models.reserva import ReservaEvento
from vitrii.services.reservas import criar_reserva
from vitrii.services.solicitante import SolicitanteAnonimo

TOTAL = 10


def test_pedidos_simultaneos_recebem_posicoes_distintas(anunciante, make_evento, db_session):
    evento = make_evento(anunciante)
    barreira = threading.Barrier(TOTAL)
    posicoes = []
    erros = []
    lock = threading.Lock()

    def pedir(i):
        db = SessionLocal()
        try:
            barreira.wait()
            reserva = criar_reserva(
                db, evento.id, "lista_espera", SolicitanteAnonimo(nome=f"Pessoa {i}", email=f"p{i}@x.com")
            )
            with lock:
                posicoes.append(reserva.posicao_lista_espera)
        except Exception as e:  # noqa: BLE001
            with lock:
                erros.append(e)
        finally:
            db.close()

    threads = [threading.Thread(target=pedir, args=(i,)) for i in range(TOTAL)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert erros == []
    assert sorted(posicoes) == list(range(1, TOTAL + 1))

    gravadas = [
        r.posicao_lista_espera
        for r in db_session.query(ReservaEvento).filter(ReservaEvento.evento_id == evento.id).all()
    ]
    assert sorted(gravadas) == list(range(1, TOTAL + 1))


def test_dois_pedidos_simultaneos(anunciante, make_evento):
    evento = make_evento(anunciante)
    barreira = threading.Barrier(2)
    posicoes = []

    def pedir(nome):
        db = SessionLocal()
        try:
            barreira.wait()
            reserva = criar_reserva(db, evento.id, "lista_espera", SolicitanteAnonimo(nome=nome, email=f"{nome}@x.com"))
            posicoes.append(reserva.posicao_lista_espera)
        finally:
            db.close()

    threads = [threading.Thread(target=pedir, args=(nome,)) for nome in ("ana", "bia")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(posicoes) == [1, 2]
