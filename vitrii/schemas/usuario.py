from typing import Optional

from pydantic import BaseModel

from vitrii.schemas.comum import VitriiSchema


class UsuarioResumo(VitriiSchema):
    id: int
    nome: str
    email: str
    telefone: Optional[str] = None


class UsuarioRead(UsuarioResumo):
    tipo_usuario: str


# Segue o formato OAuth2 (snake_case)
class Token(BaseModel):
    access_token: str
    token_type: str
    user_info: UsuarioRead
