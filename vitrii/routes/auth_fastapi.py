# vitrii/routes/auth_fastapi.py
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from vitrii import auth, database
from vitrii.exceptions import AuthenticationError
from vitrii.models.usuario import Usuario
from vitrii.schemas import usuario as schemas_usuario

router = APIRouter(tags=["Authentication"])


@router.post("/token", response_model=schemas_usuario.Token)
def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(database.get_db)):
    user = auth.get_user_by_email(db, email=form_data.username.strip().lower())  # email como username
    if not user or not user.hashed_password or not auth.verify_password(form_data.password, user.hashed_password):
        raise AuthenticationError("Email ou senha incorretos")

    access_token = auth.create_access_token(data={"sub": str(user.id), "tipo": user.tipo_usuario})
    user_info = schemas_usuario.UsuarioRead.model_validate(user)
    return {"access_token": access_token, "token_type": "bearer", "user_info": user_info}


@router.get("/me", response_model=schemas_usuario.UsuarioRead)
def read_users_me(current_user: Usuario = Depends(auth.get_usuario_atual)):
    """
    Retorna os dados do usuário atualmente logado.
    """
    return current_user
