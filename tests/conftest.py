"""
Shared pytest fixtures.

Firestore is replaced by InMemoryStore, which exposes the same methods as
services.firestore.FirestoreDB. API tests talk to the FastAPI app through
httpx's ASGITransport; the app lifespan (Firebase initialisation) does not
run there, so services are injected with dependency overrides.
"""

import copy
import os
import uuid
from typing import Callable, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Settings are read once per process, so set them before any app import
os.environ["SECRET_OR_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["LOG_LEVEL"] = "WARNING"

from exceptions import StoreUnavailable  # noqa: E402
from models.post import Post  # noqa: E402
from models.user import User, UserRecord  # noqa: E402
from services.credentials import CredentialService  # noqa: E402
from services.posts import PostService  # noqa: E402
from services.users import UserService  # noqa: E402


class InMemoryStore:
    """Dictionary-backed stand-in for FirestoreDB"""

    def __init__(self):
        self.posts: Dict[str, dict] = {}
        self.users: Dict[str, dict] = {}
        self.unavailable = False

    def _check(self):
        if self.unavailable:
            raise StoreUnavailable()

    def get_all_posts(self) -> List[Post]:
        self._check()
        posts = [Post.from_document(doc_id, copy.deepcopy(data)) for doc_id, data in self.posts.items()]
        return sorted(posts, key=lambda post: post.date, reverse=True)

    def get_post(self, post_id: str) -> Optional[Post]:
        self._check()
        data = self.posts.get(post_id)
        if data is None:
            return None
        return Post.from_document(post_id, copy.deepcopy(data))

    def create_post(self, post: Post) -> Post:
        self._check()
        post_id = uuid.uuid4().hex
        self.posts[post_id] = post.to_document()
        return post.model_copy(update={"id": post_id})

    def delete_post(self, post_id: str):
        self._check()
        self.posts.pop(post_id, None)

    def update_post(self, post_id: str, mutate: Callable[[Post], Post]) -> Optional[Post]:
        post = self.get_post(post_id)
        if post is None:
            return None
        post = mutate(post)
        document = post.to_document()
        self.posts[post_id]["likes"] = document["likes"]
        self.posts[post_id]["comments"] = document["comments"]
        return post

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        self._check()
        for user_id, data in self.users.items():
            if data["email"] == email:
                return UserRecord.from_document(user_id, copy.deepcopy(data))
        return None

    def create_user(self, user: UserRecord) -> UserRecord:
        self._check()
        user_id = uuid.uuid4().hex
        self.users[user_id] = user.to_document()
        return user.model_copy(update={"id": user_id})


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def credentials():
    # lowest bcrypt work factor keeps the suite fast
    return CredentialService(secret=os.environ["SECRET_OR_KEY"], expires_in=3600, rounds=4)


@pytest.fixture
def post_service(store):
    return PostService(store)


@pytest.fixture
def user_service(store, credentials):
    return UserService(store, credentials)


@pytest.fixture
def auth_headers(credentials):
    """Build an Authorization header for an arbitrary caller"""

    def make(user_id: str = "u1", name: str = "Alice", avatar: str = "//avatar/alice") -> Dict[str, str]:
        user = User(id=user_id, name=name, email=f"{user_id}@example.com", avatar=avatar)
        return {"Authorization": f"Bearer {credentials.issue_token(user)}"}

    return make


@pytest_asyncio.fixture
async def client(store, credentials):
    from dependencies import get_credentials, get_post_service, get_user_service
    from main import app

    app.dependency_overrides[get_credentials] = lambda: credentials
    app.dependency_overrides[get_post_service] = lambda: PostService(store)
    app.dependency_overrides[get_user_service] = lambda: UserService(store, credentials)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
