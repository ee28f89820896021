"""Named report connections persisted as a JSON array.

Every mutation rewrites the whole file through a temporary sibling and
``os.replace``, so a crash mid-write leaves either the old or the new set on
disk. When the write fails the in-memory list is rolled back, keeping memory
and disk in agreement. A lock serializes reads and mutations, so a check and
the commit that follows it happen as one step.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from threading import RLock
from typing import Any, Mapping

from .errors import DuplicateNameError, NotFoundError, StorageError, ValidationError
from .logging_utils import log_extra

_FIELDS = ("name", "url", "username", "password")


@dataclass(frozen=True)
class Connection:
    name: str
    url: str
    username: str
    password: str

    def public(self) -> dict[str, str]:
        """Connection details safe to show back to a user."""
        return {"name": self.name, "url": self.url, "username": self.username}


def _check_fields(values: Mapping[str, Any]) -> None:
    for key, value in values.items():
        if key not in _FIELDS:
            raise ValidationError(f"Unknown connection field: {key}")
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"Connection {key} must not be empty")


def _from_raw(entry: Any) -> Connection:
    if not isinstance(entry, dict) or any(k not in entry for k in _FIELDS):
        raise StorageError(
            f"Connection entries need the keys {', '.join(_FIELDS)}: {entry!r}"
        )
    if not all(isinstance(entry[k], str) for k in _FIELDS):
        raise StorageError(f"Connection fields must be strings: {entry!r}")
    return Connection(**{k: entry[k] for k in _FIELDS})


class ConnectionStore:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._log = logging.getLogger(__name__)
        self._connections: list[Connection] = []
        self._lock = RLock()
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(
                f"Cannot create connection directory {self._path.parent}: {exc}"
            ) from exc
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read {self._path}: {exc}") from exc
        if not text.strip():
            return
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Connection file {self._path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, list):
            raise StorageError(f"Connection file {self._path} must hold a JSON array")

        connections = [_from_raw(entry) for entry in raw]
        names = [c.name for c in connections]
        if len(set(names)) != len(names):
            raise StorageError(f"Connection file {self._path} repeats a connection name")
        self._connections = connections
        self._log.info(
            "Loaded connections",
            extra=log_extra(path=str(self._path), count=len(connections)),
        )

    def _save(self) -> None:
        payload = json.dumps([asdict(c) for c in self._connections], indent=2)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            try:
                tmp_path.unlink()
            except FileNotFoundError:
                pass
            except OSError:
                self._log.warning(
                    "Could not remove temporary connection file",
                    extra=log_extra(path=str(tmp_path)),
                )
            raise StorageError(f"Cannot write {self._path}: {exc}") from exc

    def _commit(self, updated: list[Connection]) -> None:
        previous = self._connections
        self._connections = updated
        try:
            self._save()
        except StorageError:
            self._connections = previous
            raise

    def _index(self, name: str) -> int | None:
        for i, conn in enumerate(self._connections):
            if conn.name == name:
                return i
        return None

    def list(self) -> list[Connection]:
        with self._lock:
            return list(self._connections)

    def get(self, name: str) -> Connection:
        with self._lock:
            index = self._index(name)
            if index is None:
                raise NotFoundError(f"Connection {name} does not exist")
            return self._connections[index]

    def add(self, conn: Connection) -> None:
        _check_fields(asdict(conn))
        with self._lock:
            if self._index(conn.name) is not None:
                raise DuplicateNameError(f"Connection {conn.name} already exists")
            self._commit([*self._connections, conn])
        self._log.info("Connection added", extra=log_extra(connection=conn.name))

    def update(self, name: str, fields: Mapping[str, str]) -> None:
        with self._lock:
            index = self._index(name)
            if index is None:
                raise NotFoundError(f"Connection {name} does not exist")
            _check_fields(fields)
            new_name = fields.get("name", name)
            if new_name != name and self._index(new_name) is not None:
                raise DuplicateNameError(f"Connection {new_name} already exists")

            updated = list(self._connections)
            updated[index] = replace(updated[index], **fields)
            self._commit(updated)
        self._log.info(
            "Connection updated",
            extra=log_extra(connection=name, fields=sorted(fields)),
        )

    def delete(self, name: str) -> None:
        with self._lock:
            index = self._index(name)
            if index is None:
                return
            self._commit(self._connections[:index] + self._connections[index + 1 :])
        self._log.info("Connection deleted", extra=log_extra(connection=name))
