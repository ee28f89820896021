from __future__ import annotations

import logging
import uuid
from typing import Mapping

import requests
from requests.auth import HTTPBasicAuth

from .config import resolve_secret
from .connections import Connection
from .errors import NetworkError
from .guardrails import encode_sql, validate_sql
from .logging_utils import log_extra, mask


class ReportClient:
    """Submit SELECT statements to a BI Publisher style report endpoint.

    The endpoint takes a JSON body ``{"sql": "<base64>"}`` behind HTTP Basic
    auth and answers with CSV text, whatever content type it declares.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._session = session or requests.Session()
        self._env = env
        self._log = logging.getLogger(__name__)

    def execute(
        self, connection: Connection, sql: str, request_id: str | None = None
    ) -> str:
        """
        Run ``sql`` against ``connection`` and return the response body.

        An HTTP error status (4xx or 5xx) counts as a protocol error and raises
        NetworkError, so the body of an error response is never returned as a
        report even though the endpoint may send one.

        Parameters:
        connection (Connection): Target endpoint and credentials
        sql (str): Statement text; must start with SELECT
        request_id (str | None): Request tracking ID

        Returns:
        str: Response body decoded as UTF-8

        Raises:
        ValidationError: If the statement is not a SELECT
        NetworkError: If the request fails or the body is not UTF-8
        """
        statement = validate_sql(sql)
        payload = {"sql": encode_sql(statement)}
        password = resolve_secret(connection.password, self._env)
        request_id = request_id or str(uuid.uuid4())

        try:
            response = self._session.post(
                connection.url,
                json=payload,
                headers={"Content-Type": "application/json"},
                auth=HTTPBasicAuth(connection.username, password),
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            self._log.warning(
                "Report request failed",
                extra=log_extra(
                    request_id=request_id,
                    connection=connection.name,
                    user=mask(connection.username, visible=2),
                    error_message=str(exc),
                ),
            )
            raise NetworkError(f"Report request failed: {exc}") from exc

        body = response.content
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise NetworkError(f"Report response is not valid UTF-8: {exc}") from exc

        self._log.info(
            "Report executed",
            extra=log_extra(
                request_id=request_id,
                connection=connection.name,
                status_code=response.status_code,
                response_bytes=len(body),
            ),
        )
        return text
