# -*- coding: utf-8 -*-
"""
Configurações da aplicação lidas de variáveis de ambiente (ou de um arquivo .env).
"""

from starlette.config import Config

config = Config(".env")

ENVIRONMENT = config("ENVIRONMENT", default="development")

DATABASE_URL = config("DATABASE_URL", default="sqlite:///./database/vitrii.db")

SECRET_KEY = config("SECRET_KEY", default="5f1c0b7a9e2d4c3b8a6f0e1d2c3b4a5968778695a4b3c2d1e0f9a8b7c6d5e4f3")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = config("ACCESS_TOKEN_EXPIRE_MINUTES", cast=int, default=60 * 8)

FRONTEND_URL = config("FRONTEND_URL", default="http://localhost:8080")

LOG_LEVEL = config("LOG_LEVEL", default="INFO")
LOG_FILE = config("LOG_FILE", default="")

# Pix / Mercado Pago
MP_ACCESS_TOKEN = config("MP_ACCESS_TOKEN", default="")
BACKEND_URL = config("BACKEND_URL", default="http://localhost:8000")
PIX_EXPIRACAO_MINUTOS = config("PIX_EXPIRACAO_MINUTOS", cast=int, default=30)
PIX_EMAIL_PAGADOR_PADRAO = config("PIX_EMAIL_PAGADOR_PADRAO", default="pagamentos@vitrii.com.br")
# Chave usada no código copia-e-cola gerado localmente (sem Mercado Pago)
PIX_CHAVE = config("PIX_CHAVE", default="pagamentos@vitrii.com.br")

# Primeiro administrador
ADMIN_EMAIL = config("ADMIN_EMAIL", default="admin@vitrii.com.br")
ADMIN_PASSWORD = config("ADMIN_PASSWORD", default="admin")
