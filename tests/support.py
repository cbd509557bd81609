"""Shared test wiring: an app over an in-memory SQLite store and helpers to seed it."""

import unittest
from datetime import datetime

from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from news_api.core.config import Settings
from news_api.core.security import create_access_token, hash_password
from news_api.factory import create_app
from news_api.models import Base, Category, News, Profile, Role, User

TEST_SECRET = "test-secret-not-for-production"
PASSWORD = "correct-horse-battery"

# Smallest valid PNG (1x1 transparent pixel).
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000100e5270de40000000049454e44ae426082"
)


def make_settings(**overrides: object) -> Settings:
    """Settings that ignore the environment's .env and hash quickly."""
    values: dict[str, object] = {
        "JWT_SECRET": SecretStr(TEST_SECRET),
        "BCRYPT_ROUNDS": 4,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_session_factory() -> sessionmaker[Session]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


class ApiTestCase(unittest.TestCase):
    """Fresh app and empty store per test."""

    def setUp(self) -> None:
        self.settings = make_settings()
        self.session_factory = make_session_factory()
        self.app = create_app(self.settings, session_factory=self.session_factory)
        self.client = TestClient(self.app)

    def add_user(
        self,
        email: str = "reader@example.com",
        name: str = "reader",
        role: Role = Role.USER,
        password: str = PASSWORD,
    ) -> int:
        with self.session_factory() as db:
            user = User(
                email=email,
                name=name,
                password_hash=hash_password(password, rounds=4),
                role=role,
                profile=Profile(),
            )
            db.add(user)
            db.commit()
            return user.id

    def add_admin(self, email: str = "admin@example.com", name: str = "admin") -> int:
        return self.add_user(email=email, name=name, role=Role.ADMIN)

    def add_category(self, name: str) -> int:
        with self.session_factory() as db:
            category = Category(name=name)
            db.add(category)
            db.commit()
            return category.id

    def add_news(
        self,
        author_id: int,
        title: str,
        content: str = "Body text.",
        category_ids: tuple[int, ...] = (),
        thumbnail: bytes | None = None,
        published: bool = True,
    ) -> int:
        with self.session_factory() as db:
            categories = db.query(Category).filter(Category.id.in_(category_ids)).all()
            news = News(
                title=title,
                content=content,
                thumbnail=thumbnail,
                published=published,
                author_id=author_id,
                categories=categories,
            )
            db.add(news)
            db.commit()
            return news.id

    def set_role(self, user_id: int, role: Role) -> None:
        with self.session_factory() as db:
            db.get(User, user_id).role = role
            db.commit()

    def token_for(self, user_id: int, now: datetime | None = None) -> str:
        return create_access_token(user_id, self.settings, now=now)

    def bearer(self, user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(user_id)}"}
