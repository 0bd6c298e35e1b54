import httpx
import pytest

from hydrus_client import API_VERSION, ClientConfig, HydrusClient, VersionMismatchError


def _client_reporting(version) -> HydrusClient:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api_version"
        return httpx.Response(200, json={"version": version, "hydrus_version": 500})

    return HydrusClient(ClientConfig(address="http://hydrus.test"), transport=httpx.MockTransport(handler))


def test_api_check_passes_on_same_version() -> None:
    assert _client_reporting(API_VERSION).api_check() == API_VERSION


def test_api_check_server_newer_blames_client() -> None:
    with pytest.raises(VersionMismatchError) as excinfo:
        _client_reporting(API_VERSION + 1).api_check()
    assert "older version of hydrus-client" in str(excinfo.value)
    assert excinfo.value.server_is_newer
    assert excinfo.value.server_version == API_VERSION + 1


def test_api_check_server_older_blames_server() -> None:
    with pytest.raises(VersionMismatchError) as excinfo:
        _client_reporting(API_VERSION - 1).api_check()
    assert "Please update your hydrus" in str(excinfo.value)
    assert not excinfo.value.server_is_newer


def test_api_check_without_version_field() -> None:
    with pytest.raises(VersionMismatchError) as excinfo:
        _client_reporting(None).api_check()
    assert excinfo.value.server_version is None
