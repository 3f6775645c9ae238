import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String

from babybook.db.session import Base
from babybook.models.base import utcnow


def new_uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Authentication account. Owned by the backend handle, not the site."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class AuthSession(Base):
    __tablename__ = "auth_sessions"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)


class Member(Base):
    __tablename__ = "members"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    email = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class Admin(Base):
    __tablename__ = "admins"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    email = Column(String)
