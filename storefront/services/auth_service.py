import uuid

import bcrypt

from storefront.domain.errors import UserExistsError, ValidationError
from storefront.domain.schemas import User, UserRecord, utc_now
from storefront.repos.base import UserRepo
from storefront.utils.settings import BCRYPT_ROUNDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# bcrypt refuses anything longer
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _password_bytes(password: str) -> bytes | None:
    encoded = password.encode("utf-8")
    return encoded if len(encoded) <= MAX_PASSWORD_BYTES else None


class AuthService:
    """Registration and login. Password hashes never leave this class."""

    def __init__(self, users: UserRepo, rounds: int = BCRYPT_ROUNDS):
        self.repo = users
        self.rounds = rounds

    def _hash(self, password: bytes) -> str:
        return bcrypt.hashpw(password, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def register(self, email: str, password: str, name: str) -> User:
        encoded = _password_bytes(password)
        if encoded is None:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        email = normalize_email(email)
        if self.repo.get_by_email(email):
            logger.warning(f"Registration refused, {email} already exists")
            raise UserExistsError(email)

        user = UserRecord(
            id=str(uuid.uuid4()),
            email=email,
            name=name,
            password_hash=self._hash(encoded),
            created_at=utc_now(),
        )
        self.repo.put(user)

        logger.info(f"Registered user {user.id}")
        return user.sanitized()

    def login(self, email: str, password: str) -> User | None:
        user = self.repo.get_by_email(normalize_email(email))
        if not user or not user.password_hash:
            return None

        encoded = _password_bytes(password)
        if encoded is None or not bcrypt.checkpw(encoded, user.password_hash.encode("utf-8")):
            logger.info(f"Failed login for user {user.id}")
            return None

        return user.sanitized()

    def get_user_by_id(self, user_id: str) -> User | None:
        user = self.repo.get(user_id)
        return user.sanitized() if user else None

    def get_user_by_email(self, email: str) -> User | None:
        user = self.repo.get_by_email(normalize_email(email))
        return user.sanitized() if user else None
