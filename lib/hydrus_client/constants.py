from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Iterable

from .errors import InvalidArgumentError

API_VERSION = 13
DEFAULT_API_ADDRESS = "http://127.0.0.1:45869"
ACCESS_KEY_HEADER = "Hydrus-Client-API-Access-Key"

ENDPOINTS = MappingProxyType(
    {
        # access management
        "API_VERSION": "/api_version",
        "SESSION_KEY": "/session_key",
        "REQUEST_NEW_PERMISSIONS": "/request_new_permissions",
        "VERIFY_ACCESS_KEY": "/verify_access_key",
        # adding files
        "ADD_FILE": "/add_files/add_file",
        # adding tags
        "CLEAN_TAGS": "/add_tags/clean_tags",
        "GET_TAG_SERVICES": "/add_tags/get_tag_services",
        "ADD_TAGS": "/add_tags/add_tags",
        # adding urls
        "GET_URL_FILES": "/add_urls/get_url_files",
        "GET_URL_INFO": "/add_urls/get_url_info",
        "ADD_URL": "/add_urls/add_url",
        "ASSOCIATE_URL": "/add_urls/associate_url",
        # cookies
        "GET_COOKIES": "/manage_cookies/get_cookies",
        "SET_COOKIES": "/manage_cookies/set_cookies",
        # pages
        "GET_PAGES": "/manage_pages/get_pages",
        "GET_PAGE_INFO": "/manage_pages/get_page_info",
        "FOCUS_PAGE": "/manage_pages/focus_page",
        # searching and fetching files
        "SEARCH_FILES": "/get_files/search_files",
        "GET_FILE": "/get_files/file",
        "GET_THUMBNAIL": "/get_files/thumbnail",
        "GET_FILE_METADATA": "/get_files/file_metadata",
    }
)


class FileStatus(IntEnum):
    NOT_IN_DATABASE = 0
    SUCCESSFUL = 1
    ALREADY_IN_DATABASE = 2
    PREVIOUSLY_DELETED = 3
    FAILED = 4
    VETOED = 7


class TagAction(IntEnum):
    ADD_TO_LOCAL = 0
    DELETE_FROM_LOCAL = 1
    PEND_TO_REPOSITORY = 2
    RESCIND_PEND_FROM_REPOSITORY = 3
    PETITION_FROM_REPOSITORY = 4
    RESCIND_PETITION_FROM_REPOSITORY = 5


class UrlType(IntEnum):
    POST_URL = 0
    FILE_URL = 2
    GALLERY_URL = 3
    WATCHABLE_URL = 4
    UNKNOWN_URL = 5


class Permission(IntEnum):
    IMPORT_URLS = 0
    IMPORT_FILES = 1
    ADD_TAGS = 2
    SEARCH_FILES = 3
    MANAGE_PAGES = 4
    MANAGE_COOKIES = 5


class ServiceStatus(IntEnum):
    CURRENT = 0
    PENDING = 1
    DELETED = 2
    PETITIONED = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class PageType(IntEnum):
    GALLERY_DOWNLOADER = 1
    SIMPLE_DOWNLOADER = 2
    HARD_DRIVE_IMPORT = 3
    PETITIONS = 5
    FILE_SEARCH = 6
    URL_DOWNLOADER = 7
    DUPLICATES = 8
    THREAD_WATCHER = 9
    PAGE_OF_PAGES = 10

    @property
    def label(self) -> str:
        if self is PageType.URL_DOWNLOADER:
            return "URL downloader"
        return self.name.replace("_", " ").capitalize()


def parse_permissions(values: Iterable[object]) -> list[Permission]:
    """Turn ints, enum members or names like ``add-tags`` into permissions."""
    out: list[Permission] = []
    for raw in values:
        if isinstance(raw, Permission):
            out.append(raw)
            continue
        if isinstance(raw, int) and not isinstance(raw, bool):
            try:
                out.append(Permission(raw))
            except ValueError:
                raise InvalidArgumentError(f"unknown permission id: {raw}", "permissions") from None
            continue
        text = str(raw).strip()
        if text.isdigit():
            out.extend(parse_permissions([int(text)]))
            continue
        key = text.upper().replace("-", "_").replace(" ", "_")
        try:
            out.append(Permission[key])
        except KeyError:
            raise InvalidArgumentError(f"unknown permission: {raw}", "permissions") from None
    return out
