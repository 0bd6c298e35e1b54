from __future__ import annotations

from typer.testing import CliRunner

from hydrus_client import AuthError, InvalidArgumentError, NetworkError, TagAction, TransportError
from hydrus_cli import main
from hydrus_cli.commands import access_cmd, files_cmd, pages_cmd, tags_cmd, urls_cmd


class _FakeClient:
    def __init__(self, error: Exception | None = None):
        self.calls: list[tuple[str, tuple, dict]] = []
        self.closed = False
        self._error = error

    def _record(self, name: str, *args, **kwargs):  # noqa: ANN002, ANN003
        self.calls.append((name, args, kwargs))
        if self._error is not None:
            raise self._error

    def api_version(self):
        self._record("api_version")
        return {"version": 13, "hydrus_version": 520}

    def search_files(self, tags, system_inbox=False, system_archive=False):  # noqa: ANN001
        self._record("search_files", tags, system_inbox=system_inbox, system_archive=system_archive)
        return {"file_ids": [11, 12]}

    def add_tags(self, hashes, **kwargs):  # noqa: ANN001, ANN003
        self._record("add_tags", hashes, **kwargs)

    def associate_url(self, hashes, **kwargs):  # noqa: ANN001, ANN003
        self._record("associate_url", hashes, **kwargs)

    def get_pages(self):
        self._record("get_pages")
        return {
            "pages": {
                "name": "top",
                "page_key": "k0",
                "page_type": 10,
                "selected": True,
                "pages": [{"name": "files", "page_key": "k1", "page_type": 6, "selected": False}],
            }
        }

    def add_file(self, path=None, *, content=None):  # noqa: ANN001
        self._record("add_file", path=path, content=content)
        return {"status": 1, "hash": "abc", "note": ""}

    def close(self) -> None:
        self.closed = True


def _patch(monkeypatch, module, client: _FakeClient) -> None:
    monkeypatch.setattr(module, "make_client", lambda *args, **kwargs: client)
    monkeypatch.setattr(module, "load_config", lambda: object())


def test_help_lists_command_groups() -> None:
    result = CliRunner().invoke(main._build_app(), ["--help"])
    assert result.exit_code == 0
    for group in ("settings", "access", "files", "tags", "urls", "cookies", "pages"):
        assert group in result.output


def test_access_version(monkeypatch) -> None:
    fake = _FakeClient()
    _patch(monkeypatch, access_cmd, fake)
    result = CliRunner().invoke(main._build_app(), ["access", "version"])
    assert result.exit_code == 0
    assert "API version 13" in result.output
    assert fake.closed


def test_files_search_passes_flags(monkeypatch) -> None:
    fake = _FakeClient()
    _patch(monkeypatch, files_cmd, fake)
    result = CliRunner().invoke(main._build_app(), ["files", "search", "blue", "red", "--inbox"])
    assert result.exit_code == 0
    assert fake.calls == [("search_files", (["blue", "red"],), {"system_inbox": True, "system_archive": False})]
    assert "11" in result.output
    assert "2 file(s)" in result.output


def test_files_add_by_path(monkeypatch, tmp_path) -> None:
    fake = _FakeClient()
    _patch(monkeypatch, files_cmd, fake)
    target = tmp_path / "a.png"
    target.write_bytes(b"png")
    result = CliRunner().invoke(main._build_app(), ["files", "add", str(target)])
    assert result.exit_code == 0
    assert fake.calls[0][2]["path"] == str(target.resolve())
    assert fake.calls[0][2]["content"] is None


def test_files_add_upload_sends_bytes(monkeypatch, tmp_path) -> None:
    fake = _FakeClient()
    _patch(monkeypatch, files_cmd, fake)
    target = tmp_path / "a.png"
    target.write_bytes(b"png")
    result = CliRunner().invoke(main._build_app(), ["files", "add", str(target), "--upload"])
    assert result.exit_code == 0
    assert fake.calls[0][2] == {"path": None, "content": b"png"}


def test_tags_add_with_action(monkeypatch) -> None:
    fake = _FakeClient()
    _patch(monkeypatch, tags_cmd, fake)
    result = CliRunner().invoke(
        main._build_app(),
        ["tags", "add", "h1", "h2", "--tag", "blue", "--action", "delete-from-local", "--no-siblings"],
    )
    assert result.exit_code == 0
    name, args, kwargs = fake.calls[0]
    assert args == (["h1", "h2"],)
    assert kwargs == {
        "add_siblings_and_parents": False,
        "service_names_to_actions_to_tags": {"my tags": {TagAction.DELETE_FROM_LOCAL: ["blue"]}},
    }


def test_tags_add_rejects_unknown_action(monkeypatch) -> None:
    fake = _FakeClient()
    _patch(monkeypatch, tags_cmd, fake)
    result = CliRunner().invoke(main._build_app(), ["tags", "add", "h1", "--tag", "x", "--action", "burn"])
    assert result.exit_code == 2
    assert fake.calls == []


def test_urls_associate(monkeypatch) -> None:
    fake = _FakeClient()
    _patch(monkeypatch, urls_cmd, fake)
    result = CliRunner().invoke(main._build_app(), ["urls", "associate", "h1", "--add", "http://a"])
    assert result.exit_code == 0
    assert fake.calls == [("associate_url", (["h1"],), {"to_add": ["http://a"], "to_delete": None})]


def test_pages_list_prints_tree(monkeypatch) -> None:
    _patch(monkeypatch, pages_cmd, _FakeClient())
    result = CliRunner().invoke(main._build_app(), ["pages", "list"])
    assert result.exit_code == 0
    assert "* top [Page of pages] k0" in result.output
    assert "files [File search] k1" in result.output


def test_transport_error_exits_with_code_2(monkeypatch) -> None:
    fake = _FakeClient(error=TransportError(500, "Internal Server Error", '{"error": "boom"}'))
    _patch(monkeypatch, pages_cmd, fake)
    result = CliRunner().invoke(main._build_app(), ["pages", "list"])
    assert result.exit_code == 2
    assert "boom" in result.output
    assert fake.closed


def test_auth_error_mentions_access_key(monkeypatch) -> None:
    _patch(monkeypatch, files_cmd, _FakeClient(error=AuthError(403, "Forbidden")))
    result = CliRunner().invoke(main._build_app(), ["files", "search", "x"])
    assert result.exit_code == 2
    assert "access key" in result.output


def test_network_error_message(monkeypatch) -> None:
    _patch(monkeypatch, access_cmd, _FakeClient(error=NetworkError("connection refused")))
    result = CliRunner().invoke(main._build_app(), ["access", "version"])
    assert result.exit_code == 2
    assert "Cannot reach hydrus" in result.output


def test_argument_error_is_reported(monkeypatch) -> None:
    _patch(monkeypatch, urls_cmd, _FakeClient(error=InvalidArgumentError("hashes must not be empty")))
    result = CliRunner().invoke(main._build_app(), ["urls", "associate", "h1", "--delete", "http://a"])
    assert result.exit_code == 2
    assert "hashes must not be empty" in result.output
