from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

import httpx

from .config_types import ClientConfig
from .constants import (
    API_VERSION,
    DEFAULT_API_ADDRESS,
    ENDPOINTS,
    ACCESS_KEY_HEADER,
    FileStatus,
    PageType,
    Permission,
    ServiceStatus,
    TagAction,
    UrlType,
    parse_permissions,
)
from .errors import InvalidArgumentError, MissingArgumentError, VersionMismatchError
from .normalize import collapse_single, exclusive, require_bool, require_list, require_mapping
from .request_spec import JsonBody, RawBody
from .transport import Transport

logger = logging.getLogger(__name__)

ACTIONS_ARGUMENT = "service_names_to_actions_to_tags"


def _service_tags(argument: str, value: Any) -> dict[str, list[str]]:
    mapping = require_mapping(argument, value)
    return {str(service): require_list(argument, tags) for service, tags in mapping.items()}


def _service_actions_tags(value: Any) -> dict[str, dict[str, list[str]]]:
    out: dict[str, dict[str, list[str]]] = {}
    for service, actions in require_mapping(ACTIONS_ARGUMENT, value).items():
        per_action: dict[str, list[str]] = {}
        for action, tags in require_mapping(ACTIONS_ARGUMENT, actions).items():
            try:
                key = str(int(action))
            except (TypeError, ValueError):
                raise InvalidArgumentError(
                    f"tag action must be a TagAction or integer, got {action!r}",
                    ACTIONS_ARGUMENT,
                ) from None
            per_action[key] = require_list(ACTIONS_ARGUMENT, tags)
        out[str(service)] = per_action
    return out


class HydrusClient:
    DEFAULT_API_ADDRESS = DEFAULT_API_ADDRESS
    API_VERSION = API_VERSION
    ENDPOINTS = ENDPOINTS
    FILE_STATUS = FileStatus
    TAG_ACTIONS = TagAction
    URL_TYPE = UrlType
    PERMISSIONS = Permission
    STATUS_NUMBERS = ServiceStatus
    PAGE_TYPES = PageType

    def __init__(self, cfg: ClientConfig | None = None, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg or ClientConfig()
        self._t = Transport(self._cfg, transport=transport)

    @property
    def address(self) -> str:
        return self._cfg.address

    @property
    def access_key(self) -> str:
        return self._cfg.key

    def close(self) -> None:
        self._t.close()

    def __enter__(self) -> HydrusClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- access management ---
    def api_version(self) -> dict[str, Any]:
        return self._t.request("GET", ENDPOINTS["API_VERSION"])

    def api_check(self) -> int:
        """Compare the server's API version with the one this client targets.

        Returns the server version when they match, raises
        ``VersionMismatchError`` otherwise.
        """
        data = self.api_version()
        version = data.get("version") if isinstance(data, dict) else None
        if not isinstance(version, int) or isinstance(version, bool):
            raise VersionMismatchError(
                "hydrus did not report an API version",
                client_version=API_VERSION,
                server_version=None,
            )
        if version > API_VERSION:
            raise VersionMismatchError(
                f"You are using an older version of hydrus-client ({API_VERSION}) that may not work "
                f"with the newer API ({version}). Please check if there is an update available!",
                client_version=API_VERSION,
                server_version=version,
            )
        if version < API_VERSION:
            raise VersionMismatchError(
                f"This version of hydrus-client ({API_VERSION}) is built for a newer version of the API "
                f"than what your hydrus installation is currently using ({version}). Please update your hydrus.",
                client_version=API_VERSION,
                server_version=version,
            )
        return version

    def session_key(self) -> dict[str, Any]:
        return self._t.request("GET", ENDPOINTS["SESSION_KEY"])

    def request_new_permissions(self, name: str, permissions: Iterable[int | str]) -> dict[str, Any]:
        """Register a new external program with the client.

        Hydrus only answers this while the 'add from api request' dialog under
        services->review services is open; otherwise it returns 403.
        """
        queries = {
            "name": name,
            "basic_permissions": [int(p) for p in parse_permissions(require_list("permissions", permissions))],
        }
        return self._t.request("GET", ENDPOINTS["REQUEST_NEW_PERMISSIONS"], queries=queries)

    def verify_access_key(self, key: str | None = None) -> dict[str, Any]:
        headers = {ACCESS_KEY_HEADER: key} if key else None
        return self._t.request("GET", ENDPOINTS["VERIFY_ACCESS_KEY"], headers=headers)

    # --- adding files ---
    def add_file(self, path: str | None = None, *, content: bytes | None = None) -> dict[str, Any]:
        if path is None and content is None:
            raise MissingArgumentError("add_file needs either path or content", "path")
        exclusive(path=path, content=content)
        if path is not None:
            body = JsonBody({"path": str(path)})
        else:
            body = RawBody(bytes(content))
        return self._t.request("POST", ENDPOINTS["ADD_FILE"], body=body)

    # --- adding tags ---
    def add_tags(
            self,
            hashes: str | Sequence[str],
            *,
            service_names_to_tags: Mapping[str, Sequence[str]] | None = None,
            service_names_to_actions_to_tags: Mapping[str, Mapping[Any, Sequence[str]]] | None = None,
            add_siblings_and_parents: bool | None = None,
    ) -> Any:
        if service_names_to_tags is None and service_names_to_actions_to_tags is None:
            raise MissingArgumentError(
                "You must have at least one 'service_names...' argument",
                "service_names_to_tags",
            )
        body: dict[str, Any] = collapse_single(hashes, "hash", "hashes")
        if service_names_to_tags is not None:
            body["service_names_to_tags"] = _service_tags("service_names_to_tags", service_names_to_tags)
        if service_names_to_actions_to_tags is not None:
            body["service_names_to_actions_to_tags"] = _service_actions_tags(service_names_to_actions_to_tags)
        if add_siblings_and_parents is not None:
            body["add_siblings_and_parents"] = require_bool("add_siblings_and_parents", add_siblings_and_parents)
        return self._t.request("POST", ENDPOINTS["ADD_TAGS"], body=JsonBody(body))

    def clean_tags(self, tags: Sequence[str]) -> dict[str, Any]:
        return self._t.request("GET", ENDPOINTS["CLEAN_TAGS"], queries={"tags": require_list("tags", tags)})

    def get_tag_services(self) -> dict[str, Any]:
        return self._t.request("GET", ENDPOINTS["GET_TAG_SERVICES"])

    # --- adding urls ---
    def get_url_files(self, url: str) -> dict[str, Any]:
        return self._t.request("GET", ENDPOINTS["GET_URL_FILES"], queries={"url": url})

    def get_url_info(self, url: str) -> dict[str, Any]:
        return self._t.request("GET", ENDPOINTS["GET_URL_INFO"], queries={"url": url})

    def add_url(
            self,
            url: str | None = None,
            *,
            destination_page_name: str | None = None,
            destination_page_key: str | None = None,
            show_destination_page: bool | None = None,
            service_names_to_tags: Mapping[str, Sequence[str]] | None = None,
    ) -> dict[str, Any]:
        """Import a URL, the same as dropping it onto the main client window."""
        if url is None:
            raise MissingArgumentError("You must have a url argument", "url")
        body: dict[str, Any] = {"url": url}
        if destination_page_name is not None:
            body["destination_page_name"] = destination_page_name
        if destination_page_key is not None:
            body["destination_page_key"] = destination_page_key
        if show_destination_page is not None:
            body["show_destination_page"] = require_bool("show_destination_page", show_destination_page)
        if service_names_to_tags is not None:
            body["service_names_to_tags"] = dict(require_mapping("service_names_to_tags", service_names_to_tags))
        return self._t.request("POST", ENDPOINTS["ADD_URL"], body=JsonBody(body))

    def associate_url(
            self,
            hashes: str | Sequence[str],
            *,
            to_add: str | Sequence[str] | None = None,
            to_delete: str | Sequence[str] | None = None,
    ) -> Any:
        if to_add is None and to_delete is None:
            raise MissingArgumentError("You must have at least one 'to_delete' or 'to_add' argument", "to_add")
        body: dict[str, Any] = {}
        if to_add is not None:
            body.update(collapse_single(to_add, "url_to_add", "urls_to_add"))
        if to_delete is not None:
            body.update(collapse_single(to_delete, "url_to_delete", "urls_to_delete"))
        body.update(collapse_single(hashes, "hash", "hashes"))
        return self._t.request("POST", ENDPOINTS["ASSOCIATE_URL"], body=JsonBody(body))

    # --- searching and fetching files ---
    def search_files(
            self,
            tags: Sequence[str],
            system_inbox: bool = False,
            system_archive: bool = False,
    ) -> dict[str, Any]:
        queries = {
            "tags": require_list("tags", tags),
            "system_inbox": bool(system_inbox),
            "system_archive": bool(system_archive),
        }
        return self._t.request("GET", ENDPOINTS["SEARCH_FILES"], queries=queries)

    def get_file_metadata(
            self,
            *,
            file_ids: Sequence[int] | None = None,
            hashes: Sequence[str] | None = None,
            only_return_identifiers: bool | None = None,
    ) -> dict[str, Any]:
        exclusive(file_ids=file_ids, hashes=hashes)
        queries: dict[str, Any] = {}
        if file_ids is not None:
            queries["file_ids"] = require_list("file_ids", file_ids)
        elif hashes is not None:
            queries["hashes"] = require_list("hashes", hashes)
        else:
            raise MissingArgumentError("file_metadata needs either file_ids or hashes", "file_ids")
        if only_return_identifiers is not None:
            queries["only_return_identifiers"] = only_return_identifiers
        logger.debug("file_metadata queries: %s", queries)
        return self._t.request("GET", ENDPOINTS["GET_FILE_METADATA"], queries=queries)

    def get_file(self, *, file_id: int | None = None, file_hash: str | None = None) -> bytes:
        return self._t.request(
            "GET",
            ENDPOINTS["GET_FILE"],
            queries=self._file_identifier(file_id, file_hash),
            expect_json=False,
        )

    def get_thumbnail(self, *, file_id: int | None = None, file_hash: str | None = None) -> bytes:
        return self._t.request(
            "GET",
            ENDPOINTS["GET_THUMBNAIL"],
            queries=self._file_identifier(file_id, file_hash),
            expect_json=False,
        )

    @staticmethod
    def _file_identifier(file_id: int | None, file_hash: str | None) -> dict[str, Any]:
        exclusive(file_id=file_id, hash=file_hash)
        if file_id is not None:
            return {"file_id": file_id}
        if file_hash is not None:
            return {"hash": file_hash}
        raise MissingArgumentError("either file_id or hash is required", "file_id")

    # --- cookies ---
    def get_cookies(self, domain: str) -> dict[str, Any]:
        return self._t.request("GET", ENDPOINTS["GET_COOKIES"], queries={"domain": domain})

    def set_cookies(self, cookies: Any) -> Any:
        """Send cookies verbatim, e.g. ``{"cookies": [[name, value, domain, path, expires], ...]}``."""
        return self._t.request("POST", ENDPOINTS["SET_COOKIES"], body=JsonBody(cookies))

    # --- pages ---
    def get_pages(self) -> dict[str, Any]:
        return self._t.request("GET", ENDPOINTS["GET_PAGES"])

    def get_page_info(self, page_key: str | None = None, *, simple: bool | None = None) -> dict[str, Any]:
        if page_key is None:
            raise MissingArgumentError("page_key argument required", "page_key")
        queries: dict[str, Any] = {"page_key": page_key}
        if simple is not None:
            queries["simple"] = simple
        return self._t.request("GET", ENDPOINTS["GET_PAGE_INFO"], queries=queries)

    def focus_page(self, page_key: str | None = None) -> Any:
        if page_key is None:
            raise MissingArgumentError("page_key argument required", "page_key")
        return self._t.request("POST", ENDPOINTS["FOCUS_PAGE"], body=JsonBody({"page_key": page_key}))
