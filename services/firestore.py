import logging
import re
from contextlib import contextmanager
from typing import Callable, List, Optional

import firebase_admin
from firebase_admin import firestore as fs
from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1 import FieldFilter

from exceptions import StoreUnavailable
from models.post import Post
from models.user import UserRecord

logger = logging.getLogger(__name__)

POSTS = "posts"
USERS = "users"

MAX_DOCUMENT_ID_BYTES = 1500
RESERVED_DOCUMENT_ID = re.compile(r"^__.*__$")


def is_valid_document_id(doc_id: str) -> bool:
    """
    Firestore ids cannot be empty, contain a slash, be '.' or '..', match
    the reserved __name__ form or exceed 1500 bytes
    """
    return (
        bool(doc_id)
        and "/" not in doc_id
        and doc_id not in (".", "..")
        and not RESERVED_DOCUMENT_ID.match(doc_id)
        and len(doc_id.encode("utf-8")) <= MAX_DOCUMENT_ID_BYTES
    )


@contextmanager
def store_call(operation: str):
    """
    Translate Google API failures into StoreUnavailable. InvalidArgument is a
    rejected request, not an outage, and propagates unchanged.
    """
    try:
        yield
    except google_exceptions.InvalidArgument:
        raise
    except google_exceptions.GoogleAPIError as e:
        logger.exception("Firestore %s failed: %s", operation, e)
        raise StoreUnavailable() from e


class FirestoreDB:
    def __init__(self, app: firebase_admin.App):
        self.db = fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)

    # ── posts ─────────────────────────────────────────────────────────────

    def get_all_posts(self) -> List[Post]:
        """Get all posts sorted by date descending"""
        with store_call("list posts"):
            docs = self.collection(POSTS).order_by("date", direction=firestore.Query.DESCENDING).stream()
            return [Post.from_document(doc.id, doc.to_dict()) for doc in docs]

    def get_post(self, post_id: str) -> Optional[Post]:
        """Get a post by ID, None when it does not exist"""
        if not is_valid_document_id(post_id):
            return None
        try:
            with store_call("get post"):
                snapshot = self.collection(POSTS).document(post_id).get()
        except google_exceptions.InvalidArgument:
            logger.info("Firestore rejected post id %r", post_id)
            return None
        if not snapshot.exists:
            return None
        return Post.from_document(snapshot.id, snapshot.to_dict())

    def create_post(self, post: Post) -> Post:
        """Insert a new post and return it with its generated id"""
        with store_call("create post"):
            post_ref = self.collection(POSTS).document()
            post_ref.set(post.to_document())
        return post.model_copy(update={"id": post_ref.id})

    def delete_post(self, post_id: str):
        with store_call("delete post"):
            self.collection(POSTS).document(post_id).delete()

    def update_post(self, post_id: str, mutate: Callable[[Post], Post]) -> Optional[Post]:
        """
        Apply mutate to a post inside a transaction.

        Only the likes and comments fields are written back. Firestore retries
        the transaction when the document changes underneath it, so concurrent
        mutations of the same post are not lost. Exceptions raised by mutate
        roll the transaction back and propagate unchanged.

        Returns:
            The updated post, or None if no post has that id
        """
        if not is_valid_document_id(post_id):
            return None

        post_ref = self.collection(POSTS).document(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                return None

            post = mutate(Post.from_document(snapshot.id, snapshot.to_dict()))
            document = post.to_document()
            transaction.update(post_ref, {
                "likes": document["likes"],
                "comments": document["comments"],
            })
            return post

        try:
            with store_call("update post"):
                return update_in_transaction(transaction, post_ref)
        except google_exceptions.InvalidArgument:
            logger.info("Firestore rejected post id %r", post_id)
            return None

    # ── users ─────────────────────────────────────────────────────────────

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with store_call("find user"):
            docs = self.collection(USERS).where(
                filter=FieldFilter("email", "==", email)
            ).limit(1).stream()
            for doc in docs:
                return UserRecord.from_document(doc.id, doc.to_dict())
        return None

    def create_user(self, user: UserRecord) -> UserRecord:
        with store_call("create user"):
            user_ref = self.collection(USERS).document()
            user_ref.set(user.to_document())
        return user.model_copy(update={"id": user_ref.id})
