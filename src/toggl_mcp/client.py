"""
Toggl Track v9 API client.

Thin async wrapper over httpx. Responses are parsed into the record models;
HTTP failures are raised as AuthenticationError or RemoteError.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from .config import API_BASE_URL, DEFAULT_TIMEOUT
from .errors import AuthenticationError, RemoteError
from .models import Project, TimeEntry, User

logger = logging.getLogger(__name__)

CREATED_WITH = "toggl-mcp"


def to_api_timestamp(dt: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with milliseconds, e.g. 2024-03-11T08:00:00.000Z."""
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def _status_error(e: httpx.HTTPStatusError) -> Exception:
    """Map an HTTP error response to AuthenticationError or RemoteError with guidance."""
    status = e.response.status_code
    body = e.response.text
    if status == 401:
        return AuthenticationError()

    if status == 403:
        hint = "Permission denied for this workspace or entry."
    elif status == 404:
        hint = "Resource not found. Check that the ID is correct and still exists in Toggl."
    elif status == 429:
        hint = "Rate limit exceeded. Wait a moment before making more requests."
    elif status >= 500:
        hint = "Toggl server error. The service may be temporarily unavailable."
    else:
        hint = "Toggl API request failed."

    message = f"{hint} (status {status})"
    if body:
        message += f": {body}"
    return RemoteError(message, status_code=status, body=body)


class TogglClient:
    """
    Client for the subset of the Toggl API used by the tools.

    The workspace ID is looked up from the user's default workspace on first
    use and kept for the lifetime of the client; it is never refreshed, so a
    client always works against a single workspace.
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._auth = httpx.BasicAuth(api_token, "api_token")
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._workspace_id: Optional[int] = None

    async def _request(
        self,
        endpoint: str,
        method: str = "GET",
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Make an authenticated request and return the decoded JSON body.

        An empty body (or a literal null) returns None.

        Raises:
            AuthenticationError: For 401 responses
            RemoteError: For any other non-2xx response, timeout or connection error
        """
        logger.debug("%s %s params=%s", method, endpoint, params)

        async with httpx.AsyncClient(
            base_url=self._base_url,
            auth=self._auth,
            timeout=self._timeout,
            transport=self._transport,
            headers={"Content-Type": "application/json"}
        ) as client:
            try:
                response = await client.request(method, endpoint, json=data, params=params)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise _status_error(e) from e
            except httpx.TimeoutException as e:
                raise RemoteError(
                    "Request timed out. The Toggl API is taking too long to respond."
                ) from e
            except httpx.HTTPError as e:
                raise RemoteError(f"Cannot connect to the Toggl API: {e}") from e

        if not response.content:
            return None
        return response.json()

    async def get_me(self) -> User:
        return User.model_validate(await self._request("/me"))

    async def get_workspace_id(self) -> int:
        if self._workspace_id is None:
            me = await self.get_me()
            self._workspace_id = me.default_workspace_id
            logger.info("Using Toggl workspace %s", self._workspace_id)
        return self._workspace_id

    async def get_current_entry(self) -> Optional[TimeEntry]:
        data = await self._request("/me/time_entries/current")
        if not data:
            return None
        return TimeEntry.model_validate(data)

    async def get_entries(self, start: datetime, end: datetime) -> List[TimeEntry]:
        """Fetch the user's entries that started within [start, end]."""
        data = await self._request(
            "/me/time_entries",
            params={
                "start_date": to_api_timestamp(start),
                "end_date": to_api_timestamp(end),
                "meta": "true",
            }
        )
        return [TimeEntry.model_validate(item) for item in data or []]

    async def get_projects(self) -> List[Project]:
        workspace_id = await self.get_workspace_id()
        data = await self._request(f"/workspaces/{workspace_id}/projects")
        return [Project.model_validate(item) for item in data or []]

    async def start_entry(
        self,
        description: str,
        start: datetime,
        project_id: Optional[int] = None
    ) -> TimeEntry:
        """Create a running entry (duration -1) starting at `start`."""
        workspace_id = await self.get_workspace_id()
        entry_data: Dict[str, Any] = {
            "created_with": CREATED_WITH,
            "description": description,
            "workspace_id": workspace_id,
            "start": to_api_timestamp(start),
            "duration": -1,
        }
        if project_id is not None:
            entry_data["project_id"] = project_id

        data = await self._request(
            f"/workspaces/{workspace_id}/time_entries",
            method="POST",
            data=entry_data
        )
        return TimeEntry.model_validate(data)

    async def stop_entry(self, entry_id: int) -> TimeEntry:
        workspace_id = await self.get_workspace_id()
        data = await self._request(
            f"/workspaces/{workspace_id}/time_entries/{entry_id}/stop",
            method="PATCH"
        )
        return TimeEntry.model_validate(data)

    async def delete_entry(self, entry_id: int) -> None:
        workspace_id = await self.get_workspace_id()
        await self._request(
            f"/workspaces/{workspace_id}/time_entries/{entry_id}",
            method="DELETE"
        )
