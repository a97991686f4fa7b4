import pytest

from services import persistence
from services.backend import Backend


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(persistence, 'DATA_DIR', str(tmp_path))
    return tmp_path


@pytest.fixture
def backend(data_dir):
    return Backend()


@pytest.fixture
def user(backend):
    return backend.auth.login("Dr. Tester", "tester@example.org")
