"""JSON file helpers shared by the embedding cache and quality manager.

Writes go to a temporary file in the target directory and are moved into
place with ``os.replace`` so a concurrent reader never observes a partially
written file.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from toolpick.lib.logging_config import get_logger

logger = get_logger(__name__)


def atomic_write_json(path: Path, payload: Any) -> None:
    """Serialize payload as JSON and atomically replace ``path``.

    Args:
        path: Destination file.
        payload: JSON-serializable data.

    Raises:
        OSError: If the directory cannot be created or the file written.
        TypeError: If the payload is not JSON serializable.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(payload, indent=2, sort_keys=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.debug(f"Wrote {len(content)} bytes to {path}")


def read_json_file(path: Path) -> Any | None:
    """Read a JSON file written by ``atomic_write_json``.

    Args:
        path: File to read.

    Returns:
        Parsed JSON data, or None if the file does not exist or is empty.

    Raises:
        OSError: If the file exists but cannot be read.
        json.JSONDecodeError: If the content is not valid JSON.
    """
    if not path.exists():
        return None

    content = path.read_text(encoding="utf-8")
    if not content.strip():
        return None
    return json.loads(content)
