import logging
from typing import Optional, Tuple

from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from synciot.models.Users import User, UserRole
from synciot.repositories.user_repository import UserRepository
from synciot.utils.decorators.decorators import translate_store_errors
from synciot.utils.errors import AuthenticationError, ConflictError

logger = logging.getLogger(__name__)

TOKEN_SALT = "synciot-auth"

repository = UserRepository()


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


class AuthService:

    @staticmethod
    def generate_token(user: User) -> str:
        """Credencial opaca assinada com a SECRET_KEY da aplicação."""
        return _serializer().dumps({"uid": user.id, "role": user.role.value})

    @staticmethod
    def user_from_token(token: str) -> Optional[User]:
        max_age = current_app.config.get("TOKEN_MAX_AGE", 86400)
        try:
            data = _serializer().loads(token, max_age=max_age)
        except SignatureExpired:
            logger.info("Token expirado")
            return None
        except BadSignature:
            return None
        user = repository.get_by_id(data.get("uid"))
        if user is None or not user.is_active:
            return None
        return user

    @staticmethod
    @translate_store_errors
    def signup(email: str, password: str, name: str) -> Tuple[User, str]:
        if repository.get_by_email(email) is not None:
            raise ConflictError("User already exists")

        user = User(email=email, name=name, role=UserRole.OPERATOR)
        user.set_password(password)
        repository.create(user)
        logger.info("Usuário %s registrado", user.id)
        return user, AuthService.generate_token(user)

    @staticmethod
    @translate_store_errors
    def login(email: str, password: str) -> Tuple[User, str]:
        user = repository.get_by_email(email)
        if user is None or not user.check_password(password):
            raise AuthenticationError("Invalid email or password")
        return user, AuthService.generate_token(user)
