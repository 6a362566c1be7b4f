from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from personal_manager.core.settings import AppSettings
from personal_manager.repositories import RepositoryFactory


@pytest.fixture()
def data_dir(tmp_path) -> Path:
    """Per-test directory for JSON collections (not created up front)."""
    return tmp_path / "data" / "json"


@pytest.fixture()
def settings(data_dir, monkeypatch) -> AppSettings:
    """JSON-backed settings isolated from any local .env file."""
    monkeypatch.delenv("SEED_ADMIN_PASSWORD", raising=False)
    return AppSettings(
        _env_file=None,
        STORAGE_BACKEND="json",
        DATA_DIR=data_dir,
        AUTO_SEED=False,
        JWT_SECRET_KEY="test-secret-key-that-is-long-enough-for-hs256-signing",
    )


@pytest.fixture()
def factory(settings) -> RepositoryFactory:
    return RepositoryFactory(settings)


@pytest.fixture()
def client(settings):
    from personal_manager.api.main import create_app

    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture()
def seeded_client(settings):
    """App whose startup seeds the default admin account."""
    from personal_manager.api.main import create_app

    seeded = settings.model_copy(update={"AUTO_SEED": True})
    with TestClient(create_app(seeded)) as c:
        yield c
