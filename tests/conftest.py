import pytest
from fastapi.testclient import TestClient

from sharex_server import build_config, create_app

PASSWORD = "correct horse battery staple"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def save_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def make_client(save_dir):
    """Build a TestClient for an app with the given options (lifespan included)."""
    opened = []

    def _make(**options):
        options.setdefault("password", PASSWORD)
        options.setdefault("save_path", str(save_dir))
        client = TestClient(create_app(build_config(**options)))
        client.__enter__()
        opened.append(client)
        return client

    yield _make

    for client in opened:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def server_options(tmp_path):
    """Options for real servers: loopback only, random port."""
    return {
        "password": PASSWORD,
        "host": "127.0.0.1",
        "port": 0,
        "save_path": str(tmp_path / "served"),
    }
