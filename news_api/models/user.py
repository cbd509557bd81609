"""ORM models for application users, their profiles and roles."""

import enum

from sqlalchemy import Column, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from news_api.models.base import Base


class Role(str, enum.Enum):
    """Access role; only ADMIN may mutate news and categories."""

    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role is read from here on every admin-gated request, never from the token.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(Role, name="role"), nullable=False, default=Role.USER)

    profile = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    news = relationship("News", back_populates="author")


class Profile(Base):
    """Empty-by-default profile created together with its user."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    bio = Column(Text, nullable=True)

    user = relationship("User", back_populates="profile")
