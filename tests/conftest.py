"""Shared test fixtures for the playlist catalog test suite.

All tests run against an in-memory SQLite database shared through a
StaticPool. Each test starts from empty tables.
"""

import itertools
import os

# Force auth off, in-memory storage and no seeding before any app imports.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"
os.environ["SEED_SAMPLE_CATALOG"] = "false"
os.environ["RATE_LIMIT_PER_MINUTE"] = "0"
os.environ["RECOMMENDATION_BACKEND"] = "local"

import pytest
from fastapi.testclient import TestClient

from playlist_catalog.database import Base, get_db, init_db, SessionLocal
from playlist_catalog.main import app
from playlist_catalog.core.token_factory import create_token
from playlist_catalog.core.config import settings
from playlist_catalog.middleware.request_context import _rate_buckets
from playlist_catalog.repositories.user_repository import UserRepository
from playlist_catalog.schemas.folder import FolderCreate
from playlist_catalog.schemas.playlist import PlaylistCreate
from playlist_catalog.services.folder_service import FolderService
from playlist_catalog.services.playlist_service import PlaylistService

init_db()

_url_counter = itertools.count(1)


@pytest.fixture(autouse=True)
def _clean_tables():
    """Delete all rows before each test, children first for foreign keys."""
    db = SessionLocal()
    try:
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client(db):
    """FastAPI TestClient with the DB dependency overridden to use the test session."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    _rate_buckets.clear()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def enable_auth(monkeypatch):
    """Turn on token checks for the duration of one test."""
    monkeypatch.setattr(settings, "auth_enabled", True)


@pytest.fixture()
def auth_headers_for(db):
    """Return a factory creating a user with *role* and bearer headers for it."""

    def _headers(username: str, role: str) -> dict:
        UserRepository(db).create(username=username, password_hash="unused", role=role)
        db.commit()
        token = create_token(subject=username, role=role, secret=settings.jwt_secret_key)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def make_folder(db):
    """Factory creating folders through the service layer."""

    def _make(name: str = "Electronic", parent=None, tags=None, **overrides):
        data = {
            "name": name,
            "image_url": f"https://img.example.com/{name.lower().replace(' ', '-')}.jpg",
            "parent_id": parent.id if parent is not None else None,
            "tags": tags or [],
        }
        data.update(overrides)
        return FolderService(db).create_folder(FolderCreate(**data))

    return _make


@pytest.fixture()
def make_playlist(db):
    """Factory creating playlists (optionally filed into folders) through the service layer."""

    def _make(name: str = "Deep House Vibes", tags=None, folders=(), **overrides):
        data = {
            "name": name,
            "spotify_url": f"https://open.spotify.com/playlist/test{next(_url_counter)}",
            "tags": tags or [],
            "folder_ids": [f.id for f in folders],
        }
        data.update(overrides)
        return PlaylistService(db).create_playlist(PlaylistCreate(**data))

    return _make


def folder_payload(name: str = "Electronic", **overrides) -> dict:
    """Camel-cased JSON body for POST /api/folders."""
    payload = {
        "name": name,
        "imageUrl": "https://img.example.com/folder.jpg",
        "description": f"{name} music",
        "tags": [],
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def folder_body():
    return folder_payload


def playlist_payload(name: str = "Deep House Vibes", **overrides) -> dict:
    """Camel-cased JSON body for POST /api/playlists."""
    payload = {
        "name": name,
        "description": "Smooth and groovy",
        "spotifyUrl": f"https://open.spotify.com/playlist/api{next(_url_counter)}",
        "tags": [],
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def playlist_body():
    return playlist_payload
