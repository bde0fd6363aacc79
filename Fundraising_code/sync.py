# sync.py
"""
Remote Sync Engine

Mirrors newly scraped projects into Airtable.

- one bulk read of the known project names
- any incoming name already known stops the call ("reached synced data")
- otherwise batches of 10, each with 3 attempts: 30s wait after a rate
  limit, 5s after anything else
- any failure is appended to the failed-pushes log for manual recovery
"""
import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Sequence, Union

from tenacity import RetryError, Retrying, stop_after_attempt

from airtable_client import RateLimitError
from schema import ProjectRecord

logger = logging.getLogger(__name__)

BATCH_SIZE = 10
MAX_ATTEMPTS = 3
RATE_LIMIT_WAIT = 30
RETRY_WAIT = 5
BATCH_PAUSE = 1

DEFAULT_FAILED_PUSHES_PATH = Path("failed_pushes.json")


class SyncError(Exception):
    """Raised when a batch could not be pushed within MAX_ATTEMPTS."""


def _pause(seconds: float) -> None:
    time.sleep(seconds)


def _backoff(retry_state) -> float:
    if isinstance(retry_state.outcome.exception(), RateLimitError):
        return RATE_LIMIT_WAIT
    return RETRY_WAIT


def _log_retry(retry_state) -> None:
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep
    if isinstance(exc, RateLimitError):
        logger.warning("Rate limit hit, waiting %d seconds...", wait)
    else:
        logger.warning("Retry attempt %d failed (%s), retrying in %ds...",
                       retry_state.attempt_number, exc, wait)


def to_airtable_fields(project: ProjectRecord) -> Dict:
    return {
        "project_name": project.project_name,
        "project_logo": project.project_logo,
        "project_link": project.project_link,
        "project_round": project.project_round,
        "project_amount": project.project_amount,
        "project_valuation": project.project_valuation,
        "project_date": project.project_date,
        "investors": json.dumps([i.model_dump() for i in project.project_investors]),
    }


def push_batch(store, batch: Sequence[ProjectRecord]) -> None:
    rows = [to_airtable_fields(p) for p in batch]
    retrying = Retrying(
        stop=stop_after_attempt(MAX_ATTEMPTS),
        wait=_backoff,
        sleep=_pause,
        before_sleep=_log_retry,
    )
    try:
        retrying(store.create_records, rows)
    except RetryError as e:
        last = e.last_attempt.exception()
        raise SyncError(
            f"Failed to push batch to Airtable after {MAX_ATTEMPTS} retries: {last}"
        ) from last

    logger.info("Pushed %d new projects to Airtable", len(rows))


def record_failed_push(
    projects: Sequence[ProjectRecord],
    path: Union[str, Path] = DEFAULT_FAILED_PUSHES_PATH,
) -> None:
    """Append one {timestamp, projects} blob; the file is never rewritten as a whole."""
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "projects": [p.model_dump() for p in projects],
    }
    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, indent=2, ensure_ascii=False))
    except OSError as e:
        logger.error("Could not write failed push to %s: %s", path, e)


def sync_projects(
    projects: List[ProjectRecord],
    store,
    failed_log_path: Union[str, Path] = DEFAULT_FAILED_PUSHES_PATH,
    batch_size: int = BATCH_SIZE,
) -> bool:
    """
    Push projects to the remote store.

    Returns True when everything was inserted, False when an already-known
    project was found (nothing inserted) or a push failed.
    """
    if not projects:
        return True

    try:
        existing = set(store.list_field_values("project_name"))

        if any(p.project_name in existing for p in projects):
            logger.info("Found existing project - stopping scrape")
            return False

        for i in range(0, len(projects), batch_size):
            push_batch(store, projects[i:i + batch_size])
            _pause(BATCH_PAUSE)

        return True

    except Exception as e:
        logger.error("Error in sync_projects: %s", e)
        record_failed_push(projects, failed_log_path)
        return False
