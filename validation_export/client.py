"""
Management API Client

Thin HTTP client for the environment validation endpoints of the Kontent.ai
Management API. Handles authentication headers, continuation-token
pagination and payload parsing. No retry, backoff or token refresh: every
failure is raised as RemoteClientError.

Endpoints:
    GET  /projects/{environment_id}
    POST /projects/{environment_id}/validation-tasks
    GET  /projects/{environment_id}/validation-tasks/{task_id}
    GET  /projects/{environment_id}/validation-tasks/{task_id}/issues
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

import requests
from pydantic import ValidationError

from validation_export.config import ManagementConfig
from validation_export.errors import (
    AuthenticationError,
    RemoteClientError,
    RemoteTimeoutError,
)
from validation_export.models import (
    EnvironmentInfo,
    IssuesPage,
    ValidationItem,
    ValidationTask,
)


logger = logging.getLogger(__name__)

CONTINUATION_HEADER = "x-continuation"


class ManagementClient:
    """Management API client bound to one environment.

    Example:
        >>> client = ManagementClient(ManagementConfig(environment_id="...", api_key="..."))
        >>> task = client.start_environment_validation()
        >>> client.check_environment_validation(task.id).status
        'queued'
    """

    def __init__(self, config: ManagementConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        })

    @property
    def environment_url(self) -> str:
        return f"{self.config.base_url}/projects/{self.config.environment_id}"

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ManagementClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str = "",
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path relative to the environment URL
            headers: Extra request headers

        Returns:
            Response JSON as dictionary

        Raises:
            AuthenticationError: On 401/403 responses
            RemoteTimeoutError: If the request timed out
            RemoteClientError: On any other failure
        """
        url = f"{self.environment_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                timeout=self.config.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise RemoteTimeoutError(
                f"Management API request timed out after {self.config.timeout}s: {method} {url}"
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise RemoteClientError(
                f"Cannot connect to Management API at {self.config.base_url}: {e}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise RemoteClientError(f"Management API request failed: {e}") from e

        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"Management API rejected the credentials ({response.status_code}). "
                "Check the API key and its permissions for this environment.",
                status_code=response.status_code,
            )

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise RemoteClientError(
                f"Management API returned {response.status_code} for {method} {url}: "
                f"{response.text}",
                status_code=response.status_code,
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteClientError(
                f"Management API returned a non-JSON body for {method} {url}",
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict):
            raise RemoteClientError(
                f"Unexpected Management API response for {method} {url}: expected an object",
                status_code=response.status_code,
            )
        return body

    def environment_information(self) -> EnvironmentInfo:
        """Get project and environment names."""
        return _parse(EnvironmentInfo, self._request("GET"), "environment information")

    def start_environment_validation(self) -> ValidationTask:
        """Create a validation task for the whole environment."""
        body = self._request("POST", "/validation-tasks")
        task = _parse(ValidationTask, body, "validation task")
        logger.debug(f"Validation task {task.id} created with status '{task.status}'")
        return task

    def check_environment_validation(self, task_id: str) -> ValidationTask:
        """Get the current state of a validation task."""
        return _parse(
            ValidationTask,
            self._request("GET", f"/validation-tasks/{task_id}"),
            "validation task",
        )

    def iter_environment_validation_issue_pages(self, task_id: str) -> Iterator[IssuesPage]:
        """Yield issue pages in order until no continuation token is returned."""
        continuation: Optional[str] = None
        page_number = 0

        while True:
            headers = {CONTINUATION_HEADER: continuation} if continuation else None
            body = self._request("GET", f"/validation-tasks/{task_id}/issues", headers=headers)
            page_number += 1

            pagination = body.get("pagination") or {}
            page = _parse(
                IssuesPage,
                {
                    "items": body.get("issues", []),
                    "continuation_token": pagination.get("continuation_token"),
                },
                "validation issues",
            )
            logger.debug(
                f"Fetched issue page {page_number} for task {task_id}: {len(page.items)} item(s)"
            )
            yield page

            if not page.continuation_token:
                return
            continuation = page.continuation_token

    def list_environment_validation_issues(self, task_id: str) -> List[ValidationItem]:
        """Get every validation item of a finished task, across all pages."""
        items: List[ValidationItem] = []
        for page in self.iter_environment_validation_issue_pages(task_id):
            items.extend(page.items)
        return items


def _parse(model, body: Dict[str, Any], what: str):
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise RemoteClientError(f"Malformed {what} in Management API response: {e}") from e
