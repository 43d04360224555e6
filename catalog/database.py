# catalog/database.py
import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from .errors import StorageUnavailable

# This file is the only place that touches the JSON collection files.
# Each file holds one JSON array; every call reads or rewrites the whole thing.

logger = logging.getLogger(__name__)

_LOCKS: Dict[str, asyncio.Lock] = {}


def collection_lock(path: Path) -> asyncio.Lock:
    key = str(Path(path).resolve())
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]


def _read_file(path: Path) -> List[Dict[str, Any]]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        # bootstrap: a collection that was never written is empty
        return []
    except OSError as e:
        logger.error("could not read %s: %s", path, e)
        raise StorageUnavailable(f"Could not read {path.name}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error("corrupt collection file %s: %s", path, e)
        raise StorageUnavailable(f"Could not parse {path.name}") from e

    if not isinstance(data, list):
        logger.error("collection file %s does not hold a JSON array", path)
        raise StorageUnavailable(f"Could not parse {path.name}")
    return data


def _write_file(path: Path, records: List[Dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


async def read_data(path: Path) -> List[Dict[str, Any]]:
    return await asyncio.to_thread(_read_file, Path(path))


async def write_data(path: Path, records: List[Dict[str, Any]]) -> None:
    await asyncio.to_thread(_write_file, Path(path), records)
    logger.debug("wrote %d records to %s", len(records), path)
