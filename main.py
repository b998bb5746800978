# -*- coding: utf-8 -*-
"""
Arquivo principal da aplicação FastAPI da Vitrii: agenda do anunciante
(eventos, reservas e fila de espera) e pagamento Pix dos anúncios.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import create_first_user
from vitrii import config
from vitrii.database import Base, engine
from vitrii.exceptions import VitriiError

# Importação dos modelos para garantir que o SQLAlchemy registre tudo
from vitrii.models import anunciante, anuncio, evento, fila_espera, pagamento, reserva, usuario  # noqa: F401
from vitrii.routes import (
    agenda_fastapi,
    auth_fastapi,
    eventos_agenda_fastapi,
    filas_espera_fastapi,
    pagamentos_fastapi,
    pagamentos_mercadopago,
    reservas_evento_fastapi,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=config.LOG_FILE or None,
)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

env = config.ENVIRONMENT

app = FastAPI(
    title="API Vitrii",
    description="Agenda do anunciante, reservas, fila de espera e pagamentos Pix",
    version="1.0.0",
    docs_url="/docs" if env != "production" else None,
    redoc_url="/redoc" if env != "production" else None,
    openapi_url="/openapi.json" if env != "production" else None,
)

origins = [
    config.FRONTEND_URL,
    "http://localhost",
    "http://localhost:8080",
    "http://127.0.0.1",
    "http://127.0.0.1:8080",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Todos os erros saem como {"error": ..., "details": [...]}
def _erro(status_code: int, message: str, details=None, headers=None):
    conteudo = {"error": message}
    if details:
        conteudo["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=conteudo, headers=headers)


@app.exception_handler(VitriiError)
async def vitrii_error_handler(request: Request, exc: VitriiError):
    if exc.status_code >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return _erro(exc.status_code, exc.message, exc.details, headers)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _erro(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    detalhes = [
        {"campo": ".".join(str(p) for p in erro.get("loc", ())), "mensagem": erro.get("msg")}
        for erro in exc.errors()
    ]
    return _erro(400, "Dados inválidos", detalhes)


# Montagem dos routers
app.include_router(auth_fastapi.router, prefix="/api/auth")
app.include_router(eventos_agenda_fastapi.router, prefix="/api/eventos-agenda")
app.include_router(reservas_evento_fastapi.router, prefix="/api/reservas-evento")
app.include_router(filas_espera_fastapi.router, prefix="/api/filas-espera")
app.include_router(agenda_fastapi.router, prefix="/api/agenda")
app.include_router(pagamentos_fastapi.router, prefix="/api/pagamentos")
app.include_router(pagamentos_mercadopago.router, prefix="/api/webhooks")

create_first_user.create_first_user()


@app.get("/", tags=["Root"])
def root():
    return {
        "mensagem": "API Vitrii",
        "documentacao": "/docs",
        "endpoints": [
            {"eventos": "/api/eventos-agenda"},
            {"reservas": "/api/reservas-evento"},
            {"filas": "/api/filas-espera"},
            {"agenda": "/api/agenda"},
            {"pagamentos": "/api/pagamentos"},
        ],
    }
