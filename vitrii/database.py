# -*- coding: utf-8 -*-
"""
Configuração do banco de dados SQLAlchemy para a aplicação FastAPI.
"""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from vitrii import config

DATABASE_URL = config.DATABASE_URL

# Se for PostgreSQL no Render/Heroku, ajusta o prefixo
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # timeout: espera pelo lock de escrita em vez de falhar com "database is locked"
    connect_args = {"check_same_thread": False, "timeout": 30}
    caminho = DATABASE_URL.split(":///", 1)[-1]
    if caminho and caminho != ":memory:":
        Path(caminho).parent.mkdir(parents=True, exist_ok=True)

engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
    pool_recycle=3600,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
