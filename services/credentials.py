from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from pydantic import ValidationError as ClaimsError

from exceptions import InvalidToken
from models.user import User

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class CredentialService:
    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: int = 3600, rounds: int = 10):
        """
        Hashes passwords and issues/verifies signed bearer tokens

        Args:
            secret: HMAC key used to sign tokens
            algorithm: JWT signing algorithm
            expires_in: token lifetime in seconds
            rounds: bcrypt work factor
        """
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in
        self.rounds = rounds

    @staticmethod
    def _password_bytes(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash_password(self, password: str) -> str:
        hashed = bcrypt.hashpw(self._password_bytes(password), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(self._password_bytes(password), hashed.encode("utf-8"))
        except ValueError:
            # stored value is not a bcrypt hash
            return False

    def issue_token(self, user: User) -> str:
        """Sign a token carrying the user's public identity"""
        payload = user.model_dump()
        payload["exp"] = datetime.now(timezone.utc) + timedelta(seconds=self.expires_in)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> User:
        """
        Decode a token issued by issue_token

        Raises:
            InvalidToken: if the token is malformed, tampered with or expired
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
            return User(
                id=claims["id"],
                name=claims["name"],
                email=claims["email"],
                avatar=claims.get("avatar"),
            )
        except jwt.ExpiredSignatureError:
            raise InvalidToken("Token has expired")
        except (jwt.InvalidTokenError, KeyError, ClaimsError):
            raise InvalidToken()
