import httpx
import pytest
from typer.testing import CliRunner

from hydrus_client import API_VERSION, ClientConfig, HydrusClient
from hydrus_cli import main
from hydrus_cli.commands import access_cmd
from hydrus_cli.compat import ensure_api_compatibility


def _client(handler) -> HydrusClient:
    return HydrusClient(ClientConfig(address="http://hydrus.test"), transport=httpx.MockTransport(handler))


def test_compatible_server_returns_version() -> None:
    client = _client(lambda request: httpx.Response(200, json={"version": API_VERSION}))
    assert ensure_api_compatibility(client) == {"api_version": API_VERSION, "compatible": True}


def test_mismatch_exits_unless_warn_only() -> None:
    client = _client(lambda request: httpx.Response(200, json={"version": API_VERSION + 2}))
    with pytest.raises(SystemExit) as excinfo:
        ensure_api_compatibility(client)
    assert excinfo.value.code == 1
    assert ensure_api_compatibility(client, warn_only=True) == {
        "api_version": API_VERSION + 2,
        "compatible": False,
    }


def test_unreachable_server_is_skipped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    assert ensure_api_compatibility(_client(handler)) is None


def test_check_warn_only_succeeds_when_server_reports_no_version(monkeypatch) -> None:
    client = _client(lambda request: httpx.Response(200, json={"hydrus_version": 520}))
    monkeypatch.setattr(access_cmd, "make_client", lambda *args, **kwargs: client)
    monkeypatch.setattr(access_cmd, "load_config", lambda: object())
    result = CliRunner().invoke(main._build_app(), ["access", "check", "--warn-only"])
    assert result.exit_code == 0
    assert "did not report an API version" in result.output


def test_check_unreachable_exits_with_code_2(monkeypatch) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    monkeypatch.setattr(access_cmd, "make_client", lambda *args, **kwargs: _client(handler))
    monkeypatch.setattr(access_cmd, "load_config", lambda: object())
    result = CliRunner().invoke(main._build_app(), ["access", "check", "--warn-only"])
    assert result.exit_code == 2
