# vitrii/auth.py
"""
Identificação do usuário chamador.

A sessão em si é responsabilidade de quem emite a identidade: aceitamos um JWT
(Authorization: Bearer, emitido por /api/auth/token) ou o cabeçalho X-User-Id
preenchido pelo middleware de autenticação à frente da API.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Header
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from vitrii import config, database
from vitrii.exceptions import AuthenticationError, ForbiddenError
from vitrii.models.usuario import Usuario

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_minutes: Optional[int] = None):
    to_encode = data.copy()
    minutes = expires_minutes if expires_minutes is not None else config.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def get_user_by_email(db: Session, email: str):
    return db.query(Usuario).filter(Usuario.email == email).first()


def _usuario_id_do_token(token: str) -> int:
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
        sub = payload.get("sub")
        return int(sub)
    except (JWTError, TypeError, ValueError):
        raise AuthenticationError("Credenciais inválidas")


def _usuario_id_do_cabecalho(valor: str) -> int:
    try:
        usuario_id = int(valor)
    except ValueError:
        raise AuthenticationError("Cabeçalho X-User-Id inválido")
    if usuario_id <= 0:
        raise AuthenticationError("Cabeçalho X-User-Id inválido")
    return usuario_id


# --- DEPENDÊNCIAS DE AUTENTICAÇÃO E AUTORIZAÇÃO ---
def get_usuario_opcional(
    token: Optional[str] = Depends(oauth2_scheme),
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(database.get_db),
) -> Optional[Usuario]:
    """Usuário identificado na requisição, ou None para visitantes."""
    if token:
        usuario_id = _usuario_id_do_token(token)
    elif x_user_id:
        usuario_id = _usuario_id_do_cabecalho(x_user_id)
    else:
        return None

    usuario = db.get(Usuario, usuario_id)
    if usuario is None:
        raise AuthenticationError("Usuário não encontrado")
    return usuario


def get_usuario_atual(usuario: Optional[Usuario] = Depends(get_usuario_opcional)) -> Usuario:
    if usuario is None:
        raise AuthenticationError("Usuário não autenticado")
    return usuario


def get_admin_user(usuario: Usuario = Depends(get_usuario_atual)) -> Usuario:
    """
    Verifica se o usuário atual é administrador ('adm').
    Se não for, bloqueia a requisição.
    """
    if not usuario.is_admin:
        raise ForbiddenError("Acesso restrito a administradores")
    return usuario
