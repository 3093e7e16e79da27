import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime = Field(default_factory=utcnow)


class Post(BaseModel):
    id: Optional[str] = None
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    likes: List[Like] = []
    comments: List[Comment] = []
    date: datetime = Field(default_factory=utcnow)

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "Post":
        """Build a Post from a stored document and its id"""
        return cls(id=doc_id, **data)

    def to_document(self) -> Dict[str, Any]:
        """Fields as they are written to the store; the id lives in the document key"""
        return self.model_dump(exclude={"id"})

    def has_liked(self, user_id: str) -> bool:
        return any(like.user == user_id for like in self.likes)

    def find_comment(self, comment_id: str) -> Optional[Comment]:
        for comment in self.comments:
            if comment.id == comment_id:
                return comment
        return None


class PostInput(BaseModel):
    """Body of create-post and add-comment requests"""
    text: Optional[str] = None
    name: Optional[str] = None
    avatar: Optional[str] = None


class DeleteResult(BaseModel):
    success: bool = True
