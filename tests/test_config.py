import pytest
from pydantic import ValidationError

from sharex_server import ConfigError, ServerConfig, ShareXServer, build_config
from sharex_server.app.config import normalize_base_url, normalize_file_listing


def test_missing_password_fails():
    with pytest.raises(ConfigError):
        build_config()


@pytest.mark.parametrize("password", ["", None])
def test_empty_password_fails(password):
    with pytest.raises(ConfigError, match="password must be provided"):
        build_config(password=password, port=1234)


def test_server_without_password_fails():
    with pytest.raises(ConfigError):
        ShareXServer()


def test_config_model_rejects_empty_password():
    with pytest.raises(ValidationError):
        ServerConfig(password="")


def test_defaults():
    cfg = build_config(password="pw")
    assert cfg.port == 8080
    assert cfg.host == "0.0.0.0"
    assert cfg.base_url == "/"
    assert cfg.filename_length == 10
    assert cfg.enable_sxcu is False
    assert cfg.file_listing == "files"
    assert cfg.save_path == "./uploads"
    assert cfg.debug is False
    assert cfg.force_https is None
    assert cfg.trust_proxy is False


def test_user_options():
    cfg = build_config(
        port=1234,
        password="pw",
        base_url="/testing",
        filename_length=20,
        save_path="./files",
        enable_sxcu=True,
        file_listing="uploads",
        debug=True,
        force_https=True,
    )
    assert cfg.port == 1234
    assert cfg.base_url == "/testing/"
    assert cfg.filename_length == 20
    assert cfg.save_path == "./files"
    assert cfg.enable_sxcu is True
    assert cfg.file_listing == "uploads"
    assert cfg.debug is True
    assert cfg.force_https is True


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("/", "/"),
        ("testing", "/testing/"),
        ("/testing", "/testing/"),
        ("testing/", "/testing/"),
        ("/a/b", "/ab/"),
        ("", "/"),
    ],
)
def test_base_url_normalization(raw, expected):
    assert normalize_base_url(raw) == expected
    assert build_config(password="pw", base_url=raw).base_url == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("files", "files"),
        ("/files", "files"),
        ("/", False),
        ("", False),
        (False, False),
        (None, False),
    ],
)
def test_file_listing_normalization(raw, expected):
    assert normalize_file_listing(raw) == expected
    assert build_config(password="pw", file_listing=raw).file_listing == expected


def test_listing_path_follows_base_url():
    cfg = build_config(password="pw", base_url="box", file_listing="/all")
    assert cfg.listing_path == "/box/all"
    assert cfg.upload_path == "/box/api/upload"
    assert cfg.sxcu_path == "/box/api/sxcu"
    assert build_config(password="pw", file_listing=False).listing_path is None


def test_trust_proxy_enables_force_https():
    assert build_config(password="pw", trust_proxy=True).force_https is True


def test_trust_proxy_keeps_explicit_force_https_false():
    cfg = build_config(password="pw", trust_proxy=True, force_https=False)
    assert cfg.force_https is False


def test_force_https_unset_without_trust_proxy():
    assert build_config(password="pw", trust_proxy=False).force_https is None


@pytest.mark.parametrize(
    "options",
    [
        {"filename_length": 0},
        {"port": 70000},
        {"port": -1},
        {"file_listing": True},
        {"file_listing": 5},
        {"no_such_option": 1},
    ],
)
def test_invalid_options(options):
    with pytest.raises(ConfigError):
        build_config(password="pw", **options)


def test_config_is_frozen():
    cfg = build_config(password="pw")
    with pytest.raises(ValidationError):
        cfg.port = 9999


def test_server_exposes_config():
    server = ShareXServer(password="pw", base_url="x")
    assert server.config.base_url == "/x/"
    assert server.port == 8080
    assert not server.running


def test_server_rejects_config_and_options_together():
    with pytest.raises(TypeError):
        ShareXServer(build_config(password="pw"), port=1)
