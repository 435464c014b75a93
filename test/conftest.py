"""
Pytest configuration and fixtures for testing.
Runs the API against an in-memory SQLite database with Redis disabled.
"""
import os
import time
import uuid

# Settings are read at import time, so the environment goes first
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['AUTH_JWT_SECRET'] = 'test-secret'
os.environ['REDIS_URL'] = 'redis://127.0.0.1:1/0'
os.environ['RATE_LIMIT_PER_MINUTE'] = '100000'
os.environ['RATE_LIMIT_PER_HOUR'] = '1000000'
os.environ['LOG_LEVEL'] = 'WARNING'

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.utils.cache import cache_service
from app.utils.rate_limiter import rate_limiter


THREE_QUESTIONS = [
    {
        'text': 'Capital of France?',
        'order': 0,
        'options': [
            {'text': 'Paris', 'isCorrect': True, 'order': 0},
            {'text': 'Lyon', 'isCorrect': False, 'order': 1},
        ],
    },
    {
        'text': 'Capital of Italy?',
        'order': 1,
        'options': [
            {'text': 'Milan', 'isCorrect': False, 'order': 0},
            {'text': 'Rome', 'isCorrect': True, 'order': 1},
        ],
    },
    {
        'text': 'Capital of Spain?',
        'order': 2,
        'options': [
            {'text': 'Madrid', 'isCorrect': True, 'order': 0},
            {'text': 'Seville', 'isCorrect': False, 'order': 1},
        ],
    },
]


def make_token(user_id, email=None, audience='authenticated', expires_in=3600, secret='test-secret'):
    """Mint an access token shaped like the auth provider's."""
    payload = {
        'sub': str(user_id),
        'aud': audience,
        'email': email,
        'exp': int(time.time()) + expires_in,
        'user_metadata': {'full_name': 'Test Author', 'avatar_url': None},
    }
    return jwt.encode(payload, secret, algorithm='HS256')


class FakeRedis:
    """Just enough of the redis client for CacheService."""

    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value

    def delete(self, key):
        self.store.pop(key, None)


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session):
    """Create test client bound to the test database."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    rate_limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fake_redis(monkeypatch):
    """Enable the play cache with an in-process store."""
    fake = FakeRedis()
    monkeypatch.setattr(cache_service, 'redis_client', fake)
    return fake


@pytest.fixture
def author_id():
    return uuid.uuid4()


@pytest.fixture
def auth_headers(author_id):
    return {'Authorization': f'Bearer {make_token(author_id, "author@test.com")}'}


@pytest.fixture
def other_auth_headers():
    return {'Authorization': f'Bearer {make_token(uuid.uuid4(), "other@test.com")}'}


@pytest.fixture
def create_quiz(client, auth_headers):
    """Factory: create a quiz, optionally with questions, and return its JSON."""
    def _create(title='Capitals', questions=None, headers=None, **fields):
        headers = headers or auth_headers
        response = client.post('/api/quizzes', json={'title': title, **fields}, headers=headers)
        assert response.status_code == 201
        quiz = response.json()
        if questions is not None:
            response = client.put(
                f"/api/quizzes/{quiz['id']}",
                json={'questions': questions},
                headers=headers,
            )
            assert response.status_code == 200
            quiz = response.json()
        return quiz
    return _create


@pytest.fixture
def capitals_quiz(create_quiz):
    """Public quiz with the three capitals questions."""
    return create_quiz(questions=THREE_QUESTIONS)
