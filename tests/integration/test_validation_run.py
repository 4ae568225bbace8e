"""
Integration tests for a complete validation run.

Wires the real ManagementClient, ValidationRunner and ResultExporter
together; only the HTTP session is replaced with canned responses.
"""

import csv
import json
from unittest.mock import Mock

import pytest

from validation_export.client import CONTINUATION_HEADER, ManagementClient
from validation_export.config import ExportConfig
from validation_export.errors import ValidationFailedError
from validation_export.orchestrator import ValidationRunner


BASE = "https://manage.example.test/v2/projects/env-123"


class FakeSession:
    """Serves queued JSON bodies per (method, path, continuation token)."""

    def __init__(self, routes):
        self.headers = {}
        self.routes = {key: list(bodies) for key, bodies in routes.items()}
        self.calls = []

    def request(self, method, url, headers=None, timeout=None):
        token = (headers or {}).get(CONTINUATION_HEADER)
        key = (method, url[len(BASE):], token)
        self.calls.append(key)

        response = Mock()
        response.status_code = 200
        response.raise_for_status = Mock()
        response.json.return_value = self.routes[key].pop(0)
        return response

    def close(self):
        pass


def issue(item, element, messages, language="default"):
    return {
        "item": {"codename": item},
        "language": {"codename": language},
        "issue_type": "variant_issue",
        "issues": [{"element": {"codename": element}, "messages": messages}],
    }


@pytest.fixture
def config(tmp_path):
    config = ExportConfig.load_from_dict({
        "management": {
            "environment_id": "env-123",
            "api_key": "key-abc",
            "base_url": "https://manage.example.test/v2",
        },
        "export_filename": "issues",
        "output_dir": str(tmp_path),
        "poll_interval": 0,
    })
    config.validate()
    return config


def routes(statuses, issue_pages):
    table = {
        ("GET", "", None): [{"id": "env-123", "name": "Sample project", "environment": "Production"}],
        ("POST", "/validation-tasks", None): [{"id": "task-1", "status": "queued"}],
        ("GET", "/validation-tasks/task-1", None): [
            {"id": "task-1", "status": status} for status in statuses
        ],
    }
    token = None
    for index, page in enumerate(issue_pages):
        next_token = f"page-{index + 2}" if index + 1 < len(issue_pages) else None
        table[("GET", "/validation-tasks/task-1/issues", token)] = [{
            "issues": page,
            "pagination": {"continuation_token": next_token},
        }]
        token = next_token
    return table


@pytest.mark.asyncio
async def test_run_exports_all_pages(config):
    session = FakeSession(routes(
        ["queued", "validating", "finished"],
        [
            [issue("home", "title", ["Required", "Too long"])],
            [issue("about", "body", ["Empty"], language="cz")],
        ],
    ))
    client = ManagementClient(config.management, session=session)

    result = await ValidationRunner.from_config(config, client).run()

    assert result.item_count == 2
    assert result.record_count == 2
    assert session.calls.count(("GET", "/validation-tasks/task-1", None)) == 3

    with open(config.csv_path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows == [
        ["Issue type", "Item", "language", "Element", "Message"],
        ["variant_issue", "home", "default", "title", "Required& Too long"],
        ["variant_issue", "about", "cz", "body", "Empty"],
    ]

    records = json.loads(config.json_path.read_text(encoding="utf-8"))
    assert [r["item"] for r in records] == ["home", "about"]


@pytest.mark.asyncio
async def test_run_without_issues(config):
    session = FakeSession(routes(["finished"], [[]]))
    client = ManagementClient(config.management, session=session)

    result = await ValidationRunner.from_config(config, client).run()

    assert not result.has_issues
    assert not config.csv_path.exists()
    assert not config.json_path.exists()


@pytest.mark.asyncio
async def test_failed_validation(config):
    session = FakeSession(routes(["queued", "failed"], [[issue("home", "title", ["x"])]]))
    client = ManagementClient(config.management, session=session)

    with pytest.raises(ValidationFailedError):
        await ValidationRunner.from_config(config, client).run()

    assert ("GET", "/validation-tasks/task-1/issues", None) not in session.calls
    assert not config.csv_path.exists()
