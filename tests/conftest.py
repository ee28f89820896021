from pathlib import Path
from unittest.mock import MagicMock

import pytest

from bip_report.client import ReportClient
from bip_report.connections import Connection, ConnectionStore
from bip_report.session import ReportSession

PROD = Connection(
    name="prod",
    url="https://bip.example.com/xmlpserver/services/report",
    username="reporter",
    password="secret",
)


def csv_rows(total_rows: int) -> str:
    lines = ["id,name"] + [f"{i},row{i}" for i in range(1, total_rows)]
    return "\n".join(lines) + "\n"


@pytest.fixture
def report_client() -> MagicMock:
    client = MagicMock(spec=ReportClient)
    client.execute.return_value = csv_rows(25)
    return client


@pytest.fixture
def session(tmp_path: Path, report_client: MagicMock) -> ReportSession:
    store = ConnectionStore(tmp_path / "connections.json")
    store.add(PROD)
    return ReportSession(store=store, client=report_client, page_size=10)
