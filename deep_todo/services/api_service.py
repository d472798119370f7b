"""Task API service for abstracting calls to the remote task service."""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..core.constants import DEFAULT_API_URL, DEFAULT_TIMEOUT, STATS_ENDPOINT, TASKS_ENDPOINT
from ..models.task import Task, TaskPriority, TaskStats, TaskStatus
from .exceptions import (
    ApiServiceError,
    AuthError,
    DataShapeError,
    NetworkError,
    NotAuthenticatedError,
    TaskNotFoundError,
)

logger = logging.getLogger(__name__)

# Python field names that differ on the wire
_WIRE_NAMES = {"due_date": "dueDate"}


class TaskApiService:
    """Service for task service operations with clean abstractions."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the HTTP client with the bearer credential.

        Args:
            token: Bearer token sent with every request
            base_url: Root URL of the task service
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)

        Raises:
            NotAuthenticatedError: If no token is given
            NetworkError: If the base URL cannot be parsed
        """
        if not token:
            raise NotAuthenticatedError("No credential stored. Please log in first.")
        self.base_url = base_url.rstrip("/")
        try:
            self.client = httpx.Client(
                base_url=self.base_url,
                headers={"Authorization": f"Bearer {token}"},
                timeout=timeout,
                transport=transport,
            )
        except httpx.InvalidURL as e:
            raise NetworkError(f"Invalid task service URL {self.base_url!r}: {e}") from e

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()

    def __enter__(self) -> "TaskApiService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """Send a request and map failures onto the service exceptions.

        Raises:
            NetworkError: If the request could not be completed
            AuthError: On 401/403 answers
            TaskNotFoundError: On 404 answers
            ApiServiceError: On any other error status
        """
        try:
            response = self.client.request(method, path, json=payload)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request {method} {path} timed out") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(f"Request {method} {path} failed: {e}") from e

        logger.debug(f"{method} {path} -> {response.status_code}")

        if response.status_code in (401, 403):
            raise AuthError(
                f"Not authorized: {self._error_message(response)}",
                status_code=response.status_code,
            )
        if response.status_code == 404:
            raise TaskNotFoundError(
                f"Not found: {self._error_message(response)}",
                status_code=response.status_code,
            )
        if response.is_error:
            raise ApiServiceError(
                f"Task service returned {response.status_code}: {self._error_message(response)}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Extract a human readable message from an error response."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in ("message", "error", "detail"):
                if body.get(key):
                    return str(body[key])
        text = response.text.strip()
        return text[:200] if text else response.reason_phrase

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DataShapeError(f"Response from {response.request.url} is not JSON") from e

    @staticmethod
    def _parse_task(data: Any) -> Task:
        try:
            return Task.model_validate(data)
        except ValidationError as e:
            raise DataShapeError(f"Unexpected task record: {e}") from e

    @staticmethod
    def _task_path(task_id: str) -> str:
        return f"{TASKS_ENDPOINT}/{quote(task_id, safe='')}"

    @staticmethod
    def _to_wire(fields: Dict[str, Any]) -> Dict[str, Any]:
        """Convert a partial field mapping to its JSON body."""
        body = {}
        for key, value in fields.items():
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, datetime):
                value = value.isoformat()
            body[_WIRE_NAMES.get(key, key)] = value
        return body

    def list_tasks(self) -> List[Task]:
        """List all tasks of the authenticated user.

        The service answers either with a bare list or with an object
        carrying a ``tasks`` list. Anything else yields an empty list.

        Returns:
            Tasks in server order

        Raises:
            DataShapeError: If a task record is malformed
        """
        data = self._json(self._request("GET", TASKS_ENDPOINT))
        if isinstance(data, list):
            items = data
        elif isinstance(data, dict) and isinstance(data.get("tasks"), list):
            items = data["tasks"]
        else:
            logger.warning(f"Unexpected task list response of type {type(data).__name__}, treating as empty")
            items = []
        return [self._parse_task(item) for item in items]

    def get_stats(self) -> TaskStats:
        """Get aggregate completion counts."""
        data = self._json(self._request("GET", STATS_ENDPOINT))
        if not isinstance(data, dict):
            raise DataShapeError("Stats response is not an object")
        try:
            return TaskStats.model_validate(data)
        except ValidationError as e:
            raise DataShapeError(f"Unexpected stats record: {e}") from e

    def create_task(
        self,
        text: str,
        due_date: Optional[datetime] = None,
        category: Optional[str] = None,
    ) -> Task:
        """Create a task. The server assigns the id.

        Args:
            text: Task description
            due_date: Optional due date
            category: Optional category label

        Returns:
            The created task as stored by the server
        """
        payload = {
            "text": text,
            "status": TaskStatus.PENDING.value,
            "priority": TaskPriority.MEDIUM.value,
            "dueDate": due_date.isoformat() if due_date else None,
            "category": category,
        }
        response = self._request("POST", TASKS_ENDPOINT, payload)
        task = self._parse_task(self._json(response))
        logger.info(f"Created task {task.id}")
        return task

    def update_task(self, task_id: str, fields: Dict[str, Any]) -> Task:
        """Apply a partial update and return the full updated task.

        Args:
            task_id: The task ID
            fields: Partial field mapping (e.g. status or priority)
        """
        response = self._request("PATCH", self._task_path(task_id), self._to_wire(fields))
        task = self._parse_task(self._json(response))
        logger.info(f"Updated task {task_id}: {', '.join(fields)}")
        return task

    def delete_task(self, task_id: str) -> None:
        """Delete a task.

        A task that is already gone on the server counts as deleted.
        """
        try:
            self._request("DELETE", self._task_path(task_id))
        except TaskNotFoundError:
            logger.info(f"Task {task_id} was already deleted on the server")
            return
        logger.info(f"Deleted task {task_id}")
