import logging
from contextlib import asynccontextmanager

import firebase_admin
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

from config import configure_logging, get_settings
from context import RequestContextMiddleware, current_request_id
from exceptions import ConnectorError, StoreUnavailable, ValidationError
from routes.posts import router as posts_router
from routes.profile import router as profile_router
from routes.users import router as users_router
from services.credentials import CredentialService
from services.firestore import FirestoreDB
from services.posts import PostService
from services.users import UserService

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(settings.firebase_credentials)
    firebase_app = firebase_admin.initialize_app(cred)

    # Initialize dependencies
    firestore = FirestoreDB(firebase_app)
    credential_service = CredentialService(
        secret=settings.secret_or_key,
        algorithm=settings.jwt_algorithm,
        expires_in=settings.token_expires_in,
        rounds=settings.bcrypt_rounds,
    )

    app.state.credentials = credential_service
    app.state.post_service = PostService(firestore)
    app.state.user_service = UserService(firestore, credential_service)
    logger.info("Connected to Firestore project %s", firebase_app.project_id)

    yield
    # Cleanup resources
    firebase_admin.delete_app(firebase_app)


app = FastAPI(lifespan=lifespan)

# middleware to set request context
app.add_middleware(RequestContextMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ConnectorError)
async def connector_error_handler(request: Request, exc: ConnectorError) -> JSONResponse:
    if isinstance(exc, StoreUnavailable):
        logger.error("Store unavailable for %s %s [%s]", request.method, request.url.path, current_request_id())
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON bodies are reported like any other validation failure"""
    errors = {}
    for detail in exc.errors():
        field = ".".join(str(part) for part in detail["loc"] if part != "body") or "body"
        errors[field] = detail["msg"]
    error = ValidationError(errors)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Include routers
app.include_router(posts_router, prefix="/posts", tags=["posts"])
app.include_router(users_router, prefix="/users", tags=["users"])
app.include_router(profile_router, prefix="/profile", tags=["profile"])
