from hydrus_client.errors_utils import parse_api_error_detail, summarize_error_detail


def test_summarize_json_error() -> None:
    details = '{"error": "no such page", "exception_type": "DataMissing", "status_code": 404}'
    assert parse_api_error_detail(details)["status_code"] == 404
    assert summarize_error_detail(details) == "DataMissing: no such page"


def test_summarize_plain_text_uses_last_line() -> None:
    details = "Traceback (most recent call last):\n  File x\nKeyError: 'hash'\n"
    assert parse_api_error_detail(details) is None
    assert summarize_error_detail(details) == "KeyError: 'hash'"


def test_summarize_empty() -> None:
    assert summarize_error_detail(None) is None
