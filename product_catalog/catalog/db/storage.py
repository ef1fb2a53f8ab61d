from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from catalog.config import STORAGE_FORMAT, STORAGE_VERSION
from catalog.exceptions import CorruptDataError, StorageError
from catalog.utils import now

log = logging.getLogger(__name__)


def write_records(path: Path, kind: str, records: list[dict[str, Any]]) -> None:
    """
    Write one versioned document holding every record, replacing the file.
    - Creates the parent directory if missing
    - No temp file / rename: an interrupted write can truncate the file
    """
    document = {
        "format": STORAGE_FORMAT,
        "version": STORAGE_VERSION,
        "kind": kind,
        "saved_at": now().isoformat(timespec="seconds"),
        "records": records,
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
    except (OSError, TypeError, ValueError) as e:
        raise StorageError(f"cannot write {path}: {e}") from e
    log.debug("wrote %d %s record(s) to %s", len(records), kind, path)


def read_records(path: Path, kind: str) -> list[dict[str, Any]]:
    """Return the stored records in saved order. Raises FileNotFoundError if missing."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except FileNotFoundError:
        raise
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise CorruptDataError(f"{path} is not a valid data file: {e}") from e
    except OSError as e:
        raise StorageError(f"cannot read {path}: {e}") from e

    if not isinstance(document, dict) or document.get("format") != STORAGE_FORMAT:
        raise CorruptDataError(f"{path} is not a {STORAGE_FORMAT} file")
    if document.get("kind") != kind:
        raise CorruptDataError(f"{path} holds '{document.get('kind')}', expected '{kind}'")
    if document.get("version") != STORAGE_VERSION:
        raise CorruptDataError(f"{path} has unsupported version {document.get('version')!r}")

    records = document.get("records")
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise CorruptDataError(f"{path} has no valid record list")
    return records
