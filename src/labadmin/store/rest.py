"""
REST lab store.

Talks to a hosted Postgres backend through its PostgREST HTTP API.
"""

import logging
from typing import Any, Mapping, Optional

import requests

from labadmin.core.models import Lab
from labadmin.store.base import LabStore, StoreError

logger = logging.getLogger(__name__)


class RestLabStore(LabStore):
    """
    Lab store for PostgREST-style backends.

    Uses the PostgREST table API:
    - List:   GET    <url>/rest/v1/<table>?select=*&order=building.asc,name.asc
    - Insert: POST   <url>/rest/v1/<table>
    - Update: PATCH  <url>/rest/v1/<table>?id=eq.<id>
    - Delete: DELETE <url>/rest/v1/<table>?id=eq.<id>
    """

    def __init__(
        self,
        url: str,
        api_key: str = "",
        table: str = "labs",
        timeout: float = 10.0,
    ):
        """
        Initialize REST store.

        Args:
            url: Base URL of the backend project
            api_key: API key sent as apikey and bearer token
            table: Name of the labs table
            timeout: Request timeout in seconds
        """
        super().__init__(table)
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.url}/rest/v1/{self.table}"

    def _headers(self, prefer: Optional[str] = None) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(
        self,
        method: str,
        params: Optional[dict[str, str]] = None,
        body: Optional[Mapping[str, Any]] = None,
        prefer: Optional[str] = None,
    ) -> requests.Response:
        """
        Send a request to the table endpoint.

        Raises:
            StoreError: On connection failure or a non-2xx response
        """
        if not self.url:
            raise StoreError("Store URL is not configured")

        try:
            response = self.session.request(
                method,
                self.endpoint,
                params=params,
                json=dict(body) if body is not None else None,
                headers=self._headers(prefer),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            raise StoreError(_error_message(e.response)) from e
        except requests.RequestException as e:
            raise StoreError(str(e)) from e

        return response

    def list_labs(self) -> list[Lab]:
        """List all labs ordered by building, then name."""
        response = self._request(
            "GET",
            params={"select": "*", "order": "building.asc,name.asc"},
        )
        try:
            rows = response.json()
        except ValueError as e:
            raise StoreError("Invalid response from store") from e
        return [Lab.from_dict(row) for row in rows or []]

    def insert(self, record: Mapping[str, Any]) -> Optional[Lab]:
        """Insert a lab and return the created row."""
        self._check_fields(record)
        response = self._request("POST", body=record, prefer="return=representation")

        try:
            rows = response.json() if response.content else []
        except ValueError:
            rows = []

        if isinstance(rows, dict):
            rows = [rows]
        return Lab.from_dict(rows[0]) if rows else None

    def update(self, lab_id: str, record: Mapping[str, Any]) -> None:
        """Update the given fields of a lab."""
        self._check_fields(record)
        self._request("PATCH", params={"id": f"eq.{lab_id}"}, body=record)
        logger.debug(f"Updated lab {lab_id}")

    def delete(self, lab_id: str) -> None:
        """Delete a lab by id."""
        self._request("DELETE", params={"id": f"eq.{lab_id}"})
        logger.debug(f"Deleted lab {lab_id}")


def _error_message(response: Optional[requests.Response]) -> str:
    """Extract a readable message from an error response."""
    if response is None:
        return "Store request failed"

    try:
        data = response.json()
    except ValueError:
        return f"Store request failed ({response.status_code})"

    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"Store request failed ({response.status_code})"
