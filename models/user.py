from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from models.post import utcnow


class User(BaseModel):
    """Identity of an authenticated caller, as carried in the bearer token"""
    id: str
    name: str
    email: str
    avatar: Optional[str] = None


class UserRecord(BaseModel):
    """A stored account, including the password hash"""
    id: Optional[str] = None
    name: str
    email: str
    avatar: Optional[str] = None
    password: str
    date: datetime = Field(default_factory=utcnow)

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "UserRecord":
        return cls(id=doc_id, **data)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"id"})

    def public(self) -> "PublicUser":
        return PublicUser(
            id=self.id,
            name=self.name,
            email=self.email,
            avatar=self.avatar,
            date=self.date,
        )


class PublicUser(BaseModel):
    id: Optional[str] = None
    name: str
    email: str
    avatar: Optional[str] = None
    date: datetime


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    password2: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
