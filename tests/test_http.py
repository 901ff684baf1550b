from unittest.mock import MagicMock

import pytest
import requests

from socialpulse.common.exceptions import PlatformAPIError
from socialpulse.fetcher.http import ApiClient


def ok_response(payload):
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = payload
    return response


def error_response(status=500, reason="Server Error"):
    response = MagicMock()
    response.ok = False
    response.status_code = status
    response.reason = reason
    return response


def make_client(session, delays):
    return ApiClient(timeout=5, max_retries=3, backoff_base=1.0, session=session, sleep=delays.append)


def test_get_json_passes_timeout():
    session = MagicMock()
    session.get.return_value = ok_response({"items": []})
    client = make_client(session, [])

    assert client.get_json("https://api.example.com/x", params={"q": "a"}) == {"items": []}
    session.get.assert_called_once_with(
        "https://api.example.com/x", params={"q": "a"}, headers=None, timeout=5)


def test_get_json_error_status_carries_status():
    session = MagicMock()
    session.get.return_value = error_response(403, "Forbidden")

    with pytest.raises(PlatformAPIError) as excinfo:
        make_client(session, []).get_json("https://api.example.com/x")
    assert excinfo.value.status == 403


def test_get_json_rejects_malformed_payloads():
    session = MagicMock()
    bad_json = ok_response(None)
    bad_json.json.side_effect = ValueError("no json")
    session.get.side_effect = [bad_json, ok_response(["not", "a", "dict"])]
    client = make_client(session, [])

    with pytest.raises(PlatformAPIError):
        client.get_json("https://api.example.com/x")
    with pytest.raises(PlatformAPIError):
        client.get_json("https://api.example.com/x")


def test_retries_with_exponential_backoff():
    session = MagicMock()
    session.get.side_effect = [
        requests.ConnectionError("reset"),
        error_response(503),
        ok_response({"ok": True}),
    ]
    delays = []

    assert make_client(session, delays).get_json_with_retries("https://api.example.com/x") == {"ok": True}
    assert delays == [1.0, 2.0]
    assert session.get.call_count == 3


def test_retries_give_up_after_cap():
    session = MagicMock()
    session.get.side_effect = requests.Timeout("slow")
    delays = []

    with pytest.raises(PlatformAPIError):
        make_client(session, delays).get_json_with_retries("https://api.example.com/x")
    assert delays == [1.0, 2.0, 4.0]
    assert session.get.call_count == 4


def test_unexpected_errors_are_not_retried():
    session = MagicMock()
    session.get.side_effect = RuntimeError("bug")
    delays = []

    with pytest.raises(RuntimeError):
        make_client(session, delays).get_json_with_retries("https://api.example.com/x")
    assert delays == []
    assert session.get.call_count == 1
