"""Lectura de exportaciones JSON de ``activity_records`` y ``users``."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from carelog.model import ActivityRecord, Client
from carelog.sources.base import (
    DataSource,
    ExportPaths,
    is_blank,
    parse_flag,
    row_to_record,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JsonExportPaths(ExportPaths):
    """Path of a JSON array export."""

    # path: file holding a JSON list of row objects


class JsonExportSource(DataSource):
    """Activity records from a JSON array (rows as the backend returns them)."""

    def load_records(self) -> list[ActivityRecord]:
        """Parse the export into typed records.

        Returns:
            Records in file order.

        Raises:
            ValueError: If the JSON document is not a list.
        """
        raw = _read_json_list(self._paths.path)
        out: list[ActivityRecord] = []
        for item in raw:
            if not isinstance(item, dict):
                logger.warning("Skipping non-object row in %s", self._paths.path)
                continue
            record = row_to_record(item)
            if record is not None:
                out.append(record)
        return out


def load_clients(path: Path, *, active_only: bool = True) -> list[Client]:
    """Load clients from a ``users`` JSON export.

    Args:
        path: JSON file with a list of ``{"id", "name", "master_uid"}`` rows.
        active_only: Drop rows whose ``is_active`` is explicitly false.

    Returns:
        Clients in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the JSON document is not a list.
    """
    if not path.is_file():
        raise FileNotFoundError(str(path))
    out: list[Client] = []
    for item in _read_json_list(path):
        client = _item_to_client(item)
        if client is None:
            continue
        if active_only and parse_flag(item.get("is_active")) is False:
            continue
        out.append(client)
    return out


def _item_to_client(item: Any) -> Client | None:
    """Convierte un ítem dict en Client; None si falta id o nombre."""
    if not isinstance(item, dict):
        return None
    if is_blank(item.get("id")) or is_blank(item.get("name")):
        logger.warning("Skipping client row without id/name: %r", item)
        return None
    master_uid = item.get("master_uid")
    return Client(
        id=str(item["id"]),
        name=str(item["name"]),
        master_uid=None if is_blank(master_uid) else str(master_uid),
    )


def _extract_json_list(text: str) -> Any:
    """Extract JSON array from text, tolerating leading non-JSON (e.g. log lines)."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        start = text.find("[")
        if start < 0:
            raise
    return json.loads(text[start:])


def _read_json_list(path: Path) -> list[Any]:
    raw = _extract_json_list(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"{path.name}: JSON export must be a list")
    return raw
