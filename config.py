import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    secret_or_key: str
    jwt_algorithm: str
    token_expires_in: int
    firebase_credentials: str
    cors_origins: List[str]
    log_level: str
    bcrypt_rounds: int


@lru_cache
def get_settings() -> Settings:
    """Read settings from the environment (and .env) once per process"""
    return Settings(
        secret_or_key=os.getenv("SECRET_OR_KEY", "secret"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        token_expires_in=int(os.getenv("TOKEN_EXPIRES_IN", "3600")),
        firebase_credentials=os.getenv("FIREBASE_CREDENTIALS", "./firebase.json"),
        cors_origins=[
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
            if origin.strip()
        ],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
    )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
