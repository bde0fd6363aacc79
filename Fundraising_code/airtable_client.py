# airtable_client.py
"""
Minimal Airtable REST client for the projects table.

Only the two calls the sync engine needs: read every value of one field,
and create up to 10 records per request.
"""
import logging
from typing import Dict, List, Optional
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

API_ROOT = "https://api.airtable.com/v0"
MAX_RECORDS_PER_REQUEST = 10
PAGE_SIZE = 100


class AirtableError(Exception):
    """Raised when Airtable answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(AirtableError):
    """Raised when Airtable returns HTTP 429."""


class AirtableClient:
    def __init__(
        self,
        api_key: str,
        base_id: str,
        table: str = "Projects",
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        self.url = f"{API_ROOT}/{base_id}/{quote(table)}"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    def _check(self, resp: requests.Response) -> dict:
        if resp.status_code == 429:
            raise RateLimitError("Airtable rate limited (429)", status_code=429)
        if resp.status_code >= 400:
            raise AirtableError(
                f"Airtable error {resp.status_code}: {resp.text[:300]}",
                status_code=resp.status_code,
            )
        return resp.json()

    def list_field_values(self, field: str) -> List:
        """Return the value of `field` for every record in the table."""
        values = []
        params: Dict = {"fields[]": field, "pageSize": PAGE_SIZE}

        while True:
            resp = self.session.get(self.url, params=params, timeout=self.timeout)
            data = self._check(resp)
            for record in data.get("records", []):
                value = record.get("fields", {}).get(field)
                if value is not None:
                    values.append(value)

            offset = data.get("offset")
            if not offset:
                break
            params["offset"] = offset

        logger.debug("Read %d values of %s from Airtable", len(values), field)
        return values

    def create_records(self, rows: List[Dict]) -> List[Dict]:
        """Create records from a list of field mappings (at most 10)."""
        if len(rows) > MAX_RECORDS_PER_REQUEST:
            raise ValueError(f"Airtable accepts at most {MAX_RECORDS_PER_REQUEST} records per request")

        resp = self.session.post(
            self.url,
            json={"records": [{"fields": fields} for fields in rows]},
            timeout=self.timeout,
        )
        return self._check(resp).get("records", [])
