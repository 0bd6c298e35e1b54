import pytest

from hydrus_client import InvalidArgumentError, PageType, Permission, ServiceStatus
from hydrus_client.constants import ENDPOINTS, parse_permissions


def test_endpoint_table_is_complete() -> None:
    assert len(ENDPOINTS) == 21
    assert all(path.startswith("/") for path in ENDPOINTS.values())
    assert ENDPOINTS["GET_FILE_METADATA"] == "/get_files/file_metadata"


def test_labels() -> None:
    assert PageType.GALLERY_DOWNLOADER.label == "Gallery downloader"
    assert PageType.URL_DOWNLOADER.label == "URL downloader"
    assert PageType.PAGE_OF_PAGES.label == "Page of pages"
    assert ServiceStatus.PETITIONED.label == "Petitioned"


def test_parse_permissions_accepts_mixed_input() -> None:
    assert parse_permissions([0, "add-tags", "SEARCH_FILES", "5", Permission.MANAGE_PAGES]) == [
        Permission.IMPORT_URLS,
        Permission.ADD_TAGS,
        Permission.SEARCH_FILES,
        Permission.MANAGE_COOKIES,
        Permission.MANAGE_PAGES,
    ]


@pytest.mark.parametrize("value", [9, "delete_everything"])
def test_parse_permissions_rejects_unknown(value) -> None:
    with pytest.raises(InvalidArgumentError):
        parse_permissions([value])
