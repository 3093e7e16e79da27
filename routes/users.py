from fastapi import APIRouter

from dependencies import CurrentUser, Users
from models.token import TokenResponse
from models.user import LoginRequest, PublicUser, RegisterRequest, User

router = APIRouter()


@router.get("/test")
async def test_users():
    return {"msg": "Users Works"}


@router.post("/register", response_model=PublicUser)
def register(users: Users, body: RegisterRequest):
    """Register a new account"""
    return users.register(body.model_dump())


@router.post("/login", response_model=TokenResponse)
def login(users: Users, body: LoginRequest):
    """Exchange email and password for a bearer token"""
    token = users.login(body.model_dump())
    return TokenResponse(success=True, token=f"Bearer {token}")


@router.get("/current", response_model=User)
async def current(current_user: CurrentUser):
    return current_user
