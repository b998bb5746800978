import logging

from vitrii import config
from vitrii.auth import get_password_hash
from vitrii.database import SessionLocal
from vitrii.models.usuario import Usuario

# Importação dos outros modelos para garantir que o SQLAlchemy registre tudo
from vitrii.models import anunciante, anuncio, evento, fila_espera, pagamento, reserva  # noqa: F401

logger = logging.getLogger(__name__)


def create_first_user():
    db = SessionLocal()

    try:
        user = db.query(Usuario).filter(Usuario.email == config.ADMIN_EMAIL).first()

        if not user:
            logger.info("Criando primeiro usuário administrador (%s)", config.ADMIN_EMAIL)
            db_user = Usuario(
                email=config.ADMIN_EMAIL,
                nome="Administrador Vitrii",
                hashed_password=get_password_hash(config.ADMIN_PASSWORD),
                tipo_usuario="adm",
            )
            db.add(db_user)
            db.commit()
        else:
            logger.info("Usuário administrador '%s' já existe.", config.ADMIN_EMAIL)

    except Exception as e:
        logger.error("Erro ao criar usuário administrador: %s", e)
        db.rollback()
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_first_user()
