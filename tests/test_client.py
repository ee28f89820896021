"""Tests for the report client, with the HTTP session mocked out."""

import json
from unittest.mock import MagicMock

import pytest
import requests
from requests.auth import HTTPBasicAuth

from bip_report.client import ReportClient
from bip_report.connections import Connection
from bip_report.errors import NetworkError, ValidationError

CONN = Connection(
    name="prod",
    url="https://bip.example.com/xmlpserver/services/report",
    username="reporter",
    password="secret",
)


def create_mock_session(body: bytes = b"a,b\n1,2\n", status_code: int = 200) -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.content = body
    response.status_code = status_code
    session = MagicMock(spec=requests.Session)
    session.post.return_value = response
    return session


def test_execute_posts_base64_sql_with_basic_auth() -> None:
    session = create_mock_session()
    client = ReportClient(session=session)

    text = client.execute(CONN, "  select * from t  ")

    assert text == "a,b\n1,2\n"
    session.post.assert_called_once_with(
        CONN.url,
        json={"sql": "c2VsZWN0ICogZnJvbSB0"},
        headers={"Content-Type": "application/json"},
        auth=HTTPBasicAuth("reporter", "secret"),
    )


def test_execute_decodes_utf8_body() -> None:
    session = create_mock_session("name\nZoë\n東京\n".encode("utf-8"))

    assert ReportClient(session=session).execute(CONN, "SELECT name FROM t") == "name\nZoë\n東京\n"


def test_invalid_sql_is_not_sent() -> None:
    session = create_mock_session()

    with pytest.raises(ValidationError):
        ReportClient(session=session).execute(CONN, "DROP TABLE t")

    session.post.assert_not_called()


def test_transport_error_becomes_network_error() -> None:
    session = create_mock_session()
    session.post.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(NetworkError, match="connection refused"):
        ReportClient(session=session).execute(CONN, "SELECT 1")


def test_http_error_status_becomes_network_error() -> None:
    session = create_mock_session(b"Unauthorized", status_code=401)
    session.post.return_value.raise_for_status.side_effect = requests.HTTPError(
        "401 Client Error: Unauthorized"
    )

    with pytest.raises(NetworkError, match="401"):
        ReportClient(session=session).execute(CONN, "SELECT 1")


def test_non_utf8_body_becomes_network_error() -> None:
    session = create_mock_session(b"\xff\xfe\xfa")

    with pytest.raises(NetworkError, match="UTF-8"):
        ReportClient(session=session).execute(CONN, "SELECT 1")


def test_password_reference_resolved_per_request() -> None:
    session = create_mock_session()
    conn = Connection(name="env", url=CONN.url, username="svc", password="${BIP_PW}")
    client = ReportClient(session=session, env={"BIP_PW": "from-env"})

    client.execute(conn, "SELECT 1")

    assert session.post.call_args.kwargs["auth"] == HTTPBasicAuth("svc", "from-env")


def test_missing_password_reference_is_validation_error() -> None:
    session = create_mock_session()
    conn = Connection(name="env", url=CONN.url, username="svc", password="${BIP_PW}")

    with pytest.raises(ValidationError, match="BIP_PW"):
        ReportClient(session=session, env={}).execute(conn, "SELECT 1")
    session.post.assert_not_called()


def test_payload_is_json_serialisable() -> None:
    session = create_mock_session()
    ReportClient(session=session).execute(CONN, "SELECT 'x' FROM dual")

    payload = session.post.call_args.kwargs["json"]
    assert json.loads(json.dumps(payload)) == payload
