from __future__ import annotations

import logging
from threading import RLock

from .client import ReportClient
from .config import AppConfig
from .connections import ConnectionStore
from .logging_utils import log_extra
from .paginator import PageView, Paginator
from .table import parse_csv


class ReportSession:
    """One store, one client and the single live result set.

    A successful query replaces the current table and resets the page cursor.
    A failed one leaves both untouched. Calls are serialized: a page move never
    interleaves with a query that is installing a new table.
    """

    def __init__(
        self,
        store: ConnectionStore,
        client: ReportClient,
        page_size: int,
    ) -> None:
        self.store = store
        self._client = client
        self._paginator = Paginator(page_size)
        self._lock = RLock()
        self._log = logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls, config: AppConfig, client: ReportClient | None = None
    ) -> ReportSession:
        return cls(
            store=ConnectionStore(config.storage.connections_path),
            client=client or ReportClient(),
            page_size=config.pagination.page_size,
        )

    def run_query(
        self, connection_name: str, sql: str, request_id: str | None = None
    ) -> PageView:
        with self._lock:
            connection = self.store.get(connection_name)
            text = self._client.execute(connection, sql, request_id=request_id)
            table = parse_csv(text)
            page = self._paginator.install(table)
        self._log.info(
            "Result installed",
            extra=log_extra(
                request_id=request_id,
                connection=connection_name,
                rows=len(table),
                page_count=page.page_count,
            ),
        )
        return page

    def current_page(self) -> PageView:
        with self._lock:
            return self._paginator.view()

    def next_page(self) -> PageView:
        with self._lock:
            return self._paginator.next()

    def prev_page(self) -> PageView:
        with self._lock:
            return self._paginator.prev()

    def handle_command(self, command: str) -> PageView:
        with self._lock:
            return self._paginator.handle(command)
