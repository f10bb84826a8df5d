import httpx
import pytest

from sharex_server import BindError, ServerStateError, ShareXServer

pytestmark = pytest.mark.anyio


@pytest.fixture
async def running(server_options):
    servers = []

    async def _start(**overrides):
        server = ShareXServer(**{**server_options, **overrides})
        servers.append(server)
        await server.start()
        return server

    yield _start

    for server in servers:
        await server.stop()


def _client(server):
    return httpx.AsyncClient(base_url=f"http://127.0.0.1:{server.port}", trust_env=False)


async def test_start_picks_port_and_serves(running, tmp_path):
    server = await running()
    assert server.running
    assert server.port != 0
    assert (tmp_path / "served").is_dir()
    async with _client(server) as http:
        r = await http.get("/")
    assert r.status_code == 200
    assert "is running" in r.text


async def test_bind_conflict_rejects_and_first_keeps_serving(running, server_options):
    first = await running()
    second = ShareXServer(**{**server_options, "port": first.port})
    with pytest.raises(BindError):
        await second.start()
    assert not second.running
    await second.stop()

    async with _client(first) as http:
        assert (await http.get("/")).status_code == 200


async def test_start_twice_is_an_error(running):
    server = await running()
    with pytest.raises(ServerStateError):
        await server.start()


async def test_stop_is_idempotent(server_options):
    server = ShareXServer(**server_options)
    await server.stop()
    await server.start()
    await server.stop()
    await server.stop()
    assert not server.running


async def test_restart_after_stop(server_options):
    server = ShareXServer(**server_options)
    await server.start()
    await server.stop()
    await server.start()
    try:
        async with _client(server) as http:
            assert (await http.get("/")).status_code == 200
    finally:
        await server.stop()


async def test_stopped_server_refuses_connections(server_options):
    server = ShareXServer(**server_options)
    await server.start()
    port = server.port
    await server.stop()
    async with httpx.AsyncClient(trust_env=False) as http:
        with pytest.raises(httpx.ConnectError):
            await http.get(f"http://127.0.0.1:{port}/")


async def test_upload_round_trip_over_http(running, password):
    server = await running()
    payload = bytes(range(256)) * 4096
    async with _client(server) as http:
        r = await http.post(
            "/api/upload",
            headers={"X-Password": password},
            files={"file": ("big.bin", payload, "application/octet-stream")},
        )
        assert r.status_code == 200
        url = r.json()["url"]
        assert url.startswith(f"http://127.0.0.1:{server.port}/")

        got = await http.get(url)
    assert got.status_code == 200
    assert got.headers["content-length"] == str(len(payload))
    assert got.content == payload


async def test_wrong_password_over_http(running, tmp_path):
    server = await running()
    async with _client(server) as http:
        r = await http.post(
            "/api/upload",
            headers={"X-Password": "nope"},
            files={"file": ("a.txt", b"a", "text/plain")},
        )
    assert r.status_code == 401
    assert list((tmp_path / "served").iterdir()) == []
