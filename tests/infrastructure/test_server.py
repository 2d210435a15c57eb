"""Server Launcher: port parsing, bind-address checks and launch failures.

Tests:
    - Missing port falls back to the default
    - Unparseable or out-of-range ports raise Bad Bind
    - Non-IP host raises Bad Bind before uvicorn is touched
    - Exceptions from uvicorn while serving raise Bad Launch
"""

import pytest

from corsprobe.core.errors import StartupError
from corsprobe.infrastructure import server
from corsprobe.infrastructure.server import check_bind_address, parse_port, serve


def test_parse_port_defaults():
    assert parse_port(None) == 3000
    assert parse_port(None, 8080) == 8080


@pytest.mark.parametrize("raw, expected", [("3000", 3000), ("0", 0), ("65535", 65535)])
def test_parse_port_accepts_valid(raw, expected):
    assert parse_port(raw) == expected


@pytest.mark.parametrize("raw", [
    "abc", "", "-1", "65536", "80.5",
    " 3000", "3000 ", "+3000", "3_000", "\u0663\u0660\u0660\u0660",
])
def test_parse_port_rejects_invalid(raw):
    with pytest.raises(StartupError) as exc_info:
        parse_port(raw)
    assert exc_info.value.tag == StartupError.BAD_BIND


def test_check_bind_address_formats():
    assert check_bind_address("0.0.0.0", 3000) == "0.0.0.0:3000"


def test_check_bind_address_rejects_hostname():
    with pytest.raises(StartupError) as exc_info:
        check_bind_address("not a host", 3000)
    assert exc_info.value.tag == StartupError.BAD_BIND


class _FakeServer:
    error: Exception | None = None
    configs: list = []

    def __init__(self, config):
        self.configs.append(config)

    def run(self):
        if self.error is not None:
            raise self.error


@pytest.fixture
def fake_server(monkeypatch):
    class FakeServer(_FakeServer):
        error = None
        configs = []

    monkeypatch.setattr(server.uvicorn, "Server", FakeServer)
    return FakeServer


def test_serve_passes_host_and_port(fake_server):
    app = object()
    serve(app, "127.0.0.1", 4321)
    (config,) = fake_server.configs
    assert config.app is app
    assert config.host == "127.0.0.1"
    assert config.port == 4321
    assert config.access_log is False


def test_serve_maps_runtime_failure_to_bad_launch(fake_server):
    fake_server.error = RuntimeError("event loop exploded")
    with pytest.raises(StartupError) as exc_info:
        serve(object(), "0.0.0.0", 3000)
    assert exc_info.value.tag == StartupError.BAD_LAUNCH


def test_serve_does_not_catch_system_exit(fake_server):
    # uvicorn exits on its own when the port is taken
    fake_server.error = SystemExit(1)
    with pytest.raises(SystemExit):
        serve(object(), "0.0.0.0", 3000)


def test_serve_checks_address_before_launch(fake_server):
    with pytest.raises(StartupError):
        serve(object(), "localhost:bad", 3000)
    assert fake_server.configs == []
