import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from exceptions import InvalidToken
from models.user import User
from services.credentials import CredentialService
from services.posts import PostService
from services.users import UserService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_credentials(request: Request) -> CredentialService:
    """Get credential service from app state"""
    return request.app.state.credentials


Credentials = Annotated[CredentialService, Depends(get_credentials)]


async def get_post_service(request: Request) -> PostService:
    """Get post service from app state"""
    return request.app.state.post_service


async def get_user_service(request: Request) -> UserService:
    """Get user service from app state"""
    return request.app.state.user_service


async def get_current_user(
        credentials: Credentials,
        authorization: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> User:
    """
    Verify the bearer token from the Authorization header and return the caller
    """
    if authorization is None:
        raise InvalidToken("Invalid authorization header")

    try:
        return credentials.verify_token(authorization.credentials)
    except InvalidToken as e:
        logger.info("Rejected bearer token: %s", e.message)
        raise


# Type annotations for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
Posts = Annotated[PostService, Depends(get_post_service)]
Users = Annotated[UserService, Depends(get_user_service)]
