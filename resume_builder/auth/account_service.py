"""account_service.py
Account sign-up and login backed by a thread-safe in-memory user store.
"""
import itertools
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from passlib.hash import pbkdf2_sha256

from resume_builder.auth.token_service import TokenService
from resume_builder.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from resume_builder.logging import LoggerFactory

auth_logger = LoggerFactory().get_logger(
    name="auth",
    logger_type="auth",
)


@dataclass
class User:
    id: int
    name: str
    email: str
    password_hash: str


class InMemoryUserStore:
    """
    Stores users keyed by lower-cased email.
    """

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get(self, email: str) -> Optional[User]:
        with self._lock:
            return self._users.get(email.strip().lower())

    def add(self, name: str, email: str, password_hash: str) -> User:
        """
        Raises:
            UserAlreadyExistsError: If the email is already registered.
        """
        key = email.strip().lower()
        with self._lock:
            if key in self._users:
                raise UserAlreadyExistsError(email)
            user = User(id=next(self._ids), name=name, email=key, password_hash=password_hash)
            self._users[key] = user
            return user

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)


class AccountService:
    """
    Creates accounts and logs users in, returning a bearer token for each.

    Args:
        token_service (TokenService): Issues tokens for authenticated users.
        store (Optional[InMemoryUserStore]): User storage. A fresh store is
            created if not provided.
    """

    def __init__(
        self,
        token_service: TokenService,
        store: Optional[InMemoryUserStore] = None,
    ):
        self.token_service = token_service
        self.store = store if store is not None else InMemoryUserStore()

    def signup(self, name: str, email: str, password: str) -> Dict[str, str]:
        """
        Register a new user.

        Returns:
            Dict[str, str]: `{"name": ..., "token": ...}`

        Raises:
            UserAlreadyExistsError: If the email is already registered.
        """
        password_hash = pbkdf2_sha256.hash(password)
        user = self.store.add(name=name, email=email, password_hash=password_hash)
        auth_logger.info(f"Created account {user.id}")
        return {"name": user.name, "token": self.token_service.issue(user.id, user.email)}

    def login(self, email: str, password: str) -> Dict[str, str]:
        """
        Authenticate an existing user.

        Returns:
            Dict[str, str]: `{"name": ..., "token": ...}`

        Raises:
            UserNotFoundError: If no user has this email.
            InvalidCredentialsError: If the password does not match.
        """
        user = self.store.get(email)
        if user is None:
            auth_logger.info("Login attempt for unknown email")
            raise UserNotFoundError(email)

        if not pbkdf2_sha256.verify(password, user.password_hash):
            auth_logger.warning(f"Failed login for account {user.id}")
            raise InvalidCredentialsError()

        return {"name": user.name, "token": self.token_service.issue(user.id, user.email)}
