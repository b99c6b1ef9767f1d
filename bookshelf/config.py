"""
Application settings read from the environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from bookshelf.infrastructure.external.classify_client import ClassifyClient
from bookshelf.infrastructure.security.password_hasher import DEFAULT_ITERATIONS


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration.

    Build with ``Settings.from_env()`` in production; tests construct it
    directly with a temporary database path.
    """

    db_path: Path = Path("data/bookshelf.db")
    secret_key: str = "change-me"
    require_login: bool = True
    classify_url: str = ClassifyClient.BASE_URL
    classify_timeout: float = 10.0
    log_level: str = "INFO"
    password_iterations: int = DEFAULT_ITERATIONS

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_path=Path(os.getenv("BOOKSHELF_DB_PATH", "data/bookshelf.db")),
            secret_key=os.getenv("BOOKSHELF_SECRET_KEY", "change-me"),
            require_login=_env_bool("BOOKSHELF_REQUIRE_LOGIN", "true"),
            classify_url=os.getenv("BOOKSHELF_CLASSIFY_URL", ClassifyClient.BASE_URL),
            classify_timeout=float(os.getenv("BOOKSHELF_CLASSIFY_TIMEOUT", "10")),
            log_level=os.getenv("BOOKSHELF_LOG_LEVEL", "INFO").upper(),
            password_iterations=int(
                os.getenv("BOOKSHELF_PASSWORD_ITERATIONS", str(DEFAULT_ITERATIONS))
            ),
        )
