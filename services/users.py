import logging
from typing import Any, Mapping

from exceptions import EmailTaken, InvalidCredentials, NotFound, ValidationError
from models.user import PublicUser, User, UserRecord
from services.credentials import CredentialService
from services.firestore import FirestoreDB
from services.validation import validate_login_input, validate_register_input
from utils.gravatar import gravatar_url

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: FirestoreDB, credentials: CredentialService):
        self.db = db
        self.credentials = credentials

    def register(self, data: Mapping[str, Any]) -> PublicUser:
        """Create an account; the email must not be registered yet"""
        errors, is_valid = validate_register_input(data)
        if not is_valid:
            raise ValidationError(errors)

        email = data["email"].strip().lower()
        if self.db.get_user_by_email(email) is not None:
            logger.info("Registration rejected, %s already exists", email)
            raise EmailTaken()

        user = UserRecord(
            name=data["name"].strip(),
            email=email,
            avatar=gravatar_url(email),
            password=self.credentials.hash_password(data["password"]),
        )
        user = self.db.create_user(user)
        logger.info("Registered user %s", user.id)
        return user.public()

    def login(self, data: Mapping[str, Any]) -> str:
        """
        Check an email/password pair

        Returns:
            A bearer token for the account
        """
        errors, is_valid = validate_login_input(data)
        if not is_valid:
            raise ValidationError(errors)

        email = data["email"].strip().lower()
        user = self.db.get_user_by_email(email)
        if user is None:
            raise NotFound("user", email)

        if not self.credentials.verify_password(data["password"], user.password):
            logger.info("Failed login for user %s", user.id)
            raise InvalidCredentials()

        identity = User(id=user.id, name=user.name, email=user.email, avatar=user.avatar)
        return self.credentials.issue_token(identity)
