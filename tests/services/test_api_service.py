"""Tests for the task API service."""

import json
import pytest
import httpx
from datetime import datetime

from deep_todo.models.task import TaskPriority, TaskStatus
from deep_todo.services.api_service import TaskApiService
from deep_todo.services.exceptions import (
    ApiServiceError,
    AuthError,
    DataShapeError,
    NetworkError,
    NotAuthenticatedError,
    TaskNotFoundError,
)

BASE_URL = "https://tasks.example.com"

TASK_RECORD = {
    "_id": "64f0a1b2c3d4e5f601234567",
    "text": "Buy milk",
    "status": "pending",
    "priority": "medium",
    "dueDate": None,
    "category": "errands",
}


def make_service(handler, token="secret-token"):
    """Create a service whose requests go to the given handler."""
    return TaskApiService(token, base_url=BASE_URL, transport=httpx.MockTransport(handler))


class TestTaskApiService:
    """Test cases for TaskApiService."""

    def test_requires_token(self):
        """Test that a missing token is rejected before any request."""
        with pytest.raises(NotAuthenticatedError):
            TaskApiService("", base_url=BASE_URL)

    def test_invalid_base_url(self):
        """Test that an unparseable base URL raises NetworkError."""
        with pytest.raises(NetworkError, match="Invalid task service URL"):
            TaskApiService("secret-token", base_url="http://tasks.example.com:notaport")

    def test_bearer_header_sent(self):
        """Test that every request carries the bearer token."""
        seen = []

        def handler(request):
            seen.append(request.headers.get("Authorization"))
            return httpx.Response(200, json=[])

        with make_service(handler) as service:
            service.list_tasks()

        assert seen == ["Bearer secret-token"]

    def test_list_tasks_bare_list(self):
        """Test listing when the server answers with a list."""
        def handler(request):
            assert request.method == "GET"
            assert request.url.path == "/tasks"
            return httpx.Response(200, json=[TASK_RECORD])

        tasks = make_service(handler).list_tasks()

        assert len(tasks) == 1
        assert tasks[0].id == TASK_RECORD["_id"]
        assert tasks[0].category == "errands"

    def test_list_tasks_wrapped(self):
        """Test listing when the server wraps tasks in an object."""
        def handler(request):
            return httpx.Response(200, json={"tasks": [TASK_RECORD]})

        tasks = make_service(handler).list_tasks()
        assert [t.text for t in tasks] == ["Buy milk"]

    @pytest.mark.parametrize("body", [{"items": []}, {"tasks": "nope"}, "text", 42])
    def test_list_tasks_other_shapes_are_empty(self, body):
        """Test that unexpected list shapes normalize to an empty list."""
        def handler(request):
            return httpx.Response(200, json=body)

        assert make_service(handler).list_tasks() == []

    def test_list_tasks_malformed_record(self):
        """Test that a malformed record raises DataShapeError."""
        def handler(request):
            return httpx.Response(200, json=[{"_id": "x", "status": "weird"}])

        with pytest.raises(DataShapeError):
            make_service(handler).list_tasks()

    def test_non_json_body(self):
        """Test that a non-JSON body raises DataShapeError."""
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(DataShapeError):
            make_service(handler).list_tasks()

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_auth_error(self, status_code):
        """Test that rejected credentials raise AuthError."""
        def handler(request):
            return httpx.Response(status_code, json={"message": "Invalid token"})

        with pytest.raises(AuthError, match="Invalid token") as exc_info:
            make_service(handler).list_tasks()
        assert exc_info.value.status_code == status_code

    def test_server_error(self):
        """Test that other error statuses raise ApiServiceError."""
        def handler(request):
            return httpx.Response(500, text="boom")

        with pytest.raises(ApiServiceError, match="500") as exc_info:
            make_service(handler).get_stats()
        assert not isinstance(exc_info.value, AuthError)

    def test_transport_failure(self):
        """Test that connection problems raise NetworkError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError, match="failed"):
            make_service(handler).list_tasks()

    def test_timeout(self):
        """Test that timeouts raise NetworkError."""
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(NetworkError, match="timed out"):
            make_service(handler).list_tasks()

    def test_get_stats(self):
        """Test fetching stats."""
        def handler(request):
            assert request.url.path == "/tasks/analytics/stats"
            return httpx.Response(200, json={"total": 5, "completed": 2})

        stats = make_service(handler).get_stats()
        assert (stats.total, stats.completed) == (5, 2)

    def test_get_stats_wrong_shape(self):
        """Test that a non-object stats body raises DataShapeError."""
        def handler(request):
            return httpx.Response(200, json=[1, 2])

        with pytest.raises(DataShapeError):
            make_service(handler).get_stats()

    def test_create_task_payload(self):
        """Test the body sent when creating a task."""
        bodies = []

        def handler(request):
            assert request.method == "POST"
            assert request.url.path == "/tasks"
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json=TASK_RECORD)

        task = make_service(handler).create_task("Buy milk", None, "errands")

        assert bodies == [{
            "text": "Buy milk",
            "status": "pending",
            "priority": "medium",
            "dueDate": None,
            "category": "errands",
        }]
        assert task.status == TaskStatus.PENDING
        assert task.priority == TaskPriority.MEDIUM

    def test_create_task_due_date_serialized(self):
        """Test that due dates are sent as ISO strings."""
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json={**TASK_RECORD, "dueDate": "2025-06-01T18:30:00"})

        make_service(handler).create_task("Buy milk", datetime(2025, 6, 1, 18, 30))
        assert bodies[0]["dueDate"] == "2025-06-01T18:30:00"

    def test_update_task(self):
        """Test a partial update."""
        requests = []

        def handler(request):
            requests.append((request.method, request.url.path, json.loads(request.content)))
            return httpx.Response(200, json={**TASK_RECORD, "priority": "high"})

        task = make_service(handler).update_task(TASK_RECORD["_id"], {"priority": TaskPriority.HIGH})

        assert requests == [("PATCH", f"/tasks/{TASK_RECORD['_id']}", {"priority": "high"})]
        assert task.priority == TaskPriority.HIGH

    def test_update_task_not_found(self):
        """Test updating a task the server does not know."""
        def handler(request):
            return httpx.Response(404, json={"error": "Task not found"})

        with pytest.raises(TaskNotFoundError):
            make_service(handler).update_task("missing", {"status": TaskStatus.COMPLETED})

    def test_delete_task(self):
        """Test deleting a task."""
        requests = []

        def handler(request):
            requests.append((request.method, request.url.path))
            return httpx.Response(204)

        assert make_service(handler).delete_task("abc") is None
        assert requests == [("DELETE", "/tasks/abc")]

    def test_delete_task_already_gone(self):
        """Test that deleting an already deleted task is not an error."""
        def handler(request):
            return httpx.Response(404, json={"message": "Task not found"})

        make_service(handler).delete_task("abc")

    def test_delete_task_failure(self):
        """Test that a failing delete raises."""
        def handler(request):
            return httpx.Response(500, json={"message": "db down"})

        with pytest.raises(ApiServiceError, match="db down"):
            make_service(handler).delete_task("abc")

    def test_task_id_is_escaped(self):
        """Test that ids are quoted in the URL path."""
        paths = []

        def handler(request):
            paths.append(request.url.raw_path)
            return httpx.Response(204)

        make_service(handler).delete_task("a/b")
        assert paths == [b"/tasks/a%2Fb"]
