# archive.py
import json
import logging
from pathlib import Path
from typing import Iterable, Union

from schema import ProjectRecord

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_PATH = Path("rootdata_projects.json")


def load_archive(path: Union[str, Path] = DEFAULT_ARCHIVE_PATH) -> dict:
    """Read the archive document; a missing or unreadable file counts as empty."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError, ValueError):
        return {"projects": []}

    if not isinstance(data, dict) or not isinstance(data.get("projects"), list):
        return {"projects": []}
    return data


def append_projects(
    projects: Iterable[ProjectRecord],
    path: Union[str, Path] = DEFAULT_ARCHIVE_PATH,
) -> None:
    """
    Append records to the JSON archive (read, extend, rewrite the whole file).

    Not crash-safe: dying between the read and the write can lose the file.
    Failures are logged and never raised to the caller.
    """
    try:
        data = load_archive(path)
        data["projects"].extend(p.model_dump() for p in projects)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except Exception as e:
        logger.error("Error appending to JSON archive %s: %s", path, e)
