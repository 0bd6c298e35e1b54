from hydrus_cli.formatting import format_duration, format_size, format_timestamp, iter_pages, metadata_rows, page_type_label


def test_format_size_units() -> None:
    assert format_size(None) == "-"
    assert format_size(512) == "512B"
    assert format_size(1536) == "1.5KB"
    assert format_size(5 * 1024 * 1024) == "5.0MB"


def test_format_duration_from_milliseconds() -> None:
    assert format_duration(None) == "-"
    assert format_duration(4500) == "4s"
    assert format_duration(125_000) == "2m05s"
    assert format_duration(3_725_000) == "1h02m"


def test_format_timestamp_is_utc() -> None:
    assert format_timestamp(0) == "1970-01-01T00:00:00Z"


def test_page_type_label_falls_back() -> None:
    assert page_type_label(6) == "File search"
    assert page_type_label(4) == "4"
    assert page_type_label(None) == "-"


def test_iter_pages_walks_depth_first() -> None:
    tree = {
        "name": "top pages notebook",
        "pages": [
            {"name": "files", "pages": []},
            {"name": "downloads", "pages": [{"name": "gallery"}]},
        ],
    }
    assert [(depth, page["name"]) for depth, page in iter_pages(tree)] == [
        (0, "top pages notebook"),
        (1, "files"),
        (1, "downloads"),
        (2, "gallery"),
    ]


def test_metadata_rows() -> None:
    rows = metadata_rows([{"file_id": 1, "hash": "ab", "mime": "image/png", "size": 2048, "width": 10, "height": 20,
                           "time_modified": 86400}])
    assert rows == [["1", "ab", "image/png", "2.0KB", "10x20", "-", "1970-01-02T00:00:00Z"]]
