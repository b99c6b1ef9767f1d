"""
Domain service for registration and login.
"""

import logging

from bookshelf.domain.entities import User
from bookshelf.domain.errors import InvalidCredentialsError
from bookshelf.domain.ports import PasswordHasher, UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """
    Moves a visitor from anonymous to authenticated.

    Both operations return the User on success; the API layer is
    responsible for recording the username in the session.
    """

    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        # Checked against when the username is unknown so both failures cost one verify
        self._dummy_secret = hasher.hash("")

    def register(self, username: str, password: str) -> User:
        """
        Create a new user.

        Raises:
            ValueError: If username or password is empty
            DuplicateUserError: If the username is already taken
        """
        username = _require(username, "username").strip()
        _require(password, "password")

        user = User(username=username, secret=self._hasher.hash(password))
        self._user_repo.add(user)
        logger.info("Registered user %s", username)
        return user

    def login(self, username: str, password: str) -> User:
        """
        Verify a username and password.

        Unknown users and wrong passwords raise the same error after the
        same hashing work, so neither the response nor its timing reveals
        which usernames exist.

        Raises:
            ValueError: If username or password is empty
            InvalidCredentialsError: If the credentials do not match
        """
        username = _require(username, "username").strip()
        _require(password, "password")

        user = self._user_repo.get_by_username(username)
        if user is None:
            self._hasher.verify(password, self._dummy_secret)
        if user is None or not self._hasher.verify(password, user.secret):
            logger.warning("Failed login for %s", username)
            raise InvalidCredentialsError("Invalid username or password")

        return user


def _require(value: str, name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{name} is required")
    return value
