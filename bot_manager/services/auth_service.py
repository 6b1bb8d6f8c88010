from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash
from typing import Optional
import logging

from bot_manager.models.user import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthError(Exception):
    """Sign-up or sign-in was rejected"""


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        return self.db.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def sign_up(self, email: str, password: str) -> User:
        email = (email or "").strip().lower()
        if not email or not password:
            raise AuthError("Informe email e senha")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres")
        if self.get_user_by_email(email):
            raise AuthError("Este email já está cadastrado")

        user = User(email=email, password_hash=generate_password_hash(password))
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError:
            self.db.rollback()
            raise AuthError("Este email já está cadastrado")

        logger.info(f"User signed up: {user.id}")
        return user

    def sign_in(self, email: str, password: str) -> User:
        if not email or not password:
            raise AuthError("Informe email e senha")

        user = self.get_user_by_email(email)
        if user is None or not check_password_hash(user.password_hash, password):
            logger.warning(f"Failed sign-in for {email.strip().lower()}")
            raise AuthError("Email ou senha inválidos")

        logger.info(f"User signed in: {user.id}")
        return user
