"""
Pytest configuration and fixtures for test isolation.
"""
import os

import pytest

from validation_export.models import ValidationItem


@pytest.fixture(autouse=True)
def isolate_tests(tmp_path, monkeypatch):
    """
    Automatically isolate each test by:
    1. Running in a temporary working directory (exports and config lookups)
    2. Removing configuration environment variables
    """
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith(("KONTENT_", "VALIDATION_")):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def make_item():
    """Build a ValidationItem from plain values.

    Usage:
        make_item("home", issues=[("title", ["Required"])])
    """
    def _make(item="home", issue_type="content_type", language="default", issues=()):
        return ValidationItem.model_validate({
            "item": {"codename": item},
            "language": {"codename": language},
            "issue_type": issue_type,
            "issues": [
                {"element": {"codename": element}, "messages": list(messages)}
                for element, messages in issues
            ],
        })
    return _make


@pytest.fixture
def issues_payload():
    """A Management API issue listing body with two items."""
    return {
        "issues": [
            {
                "item": {"id": "i1", "name": "Home", "codename": "home"},
                "language": {"id": "l1", "name": "Default", "codename": "default"},
                "issue_type": "variant_issue",
                "issues": [
                    {
                        "element": {"id": "e1", "name": "Title", "codename": "title"},
                        "messages": ["Required", "Too long"],
                    }
                ],
            },
            {
                "item": {"id": "i2", "name": "About", "codename": "about"},
                "language": {"id": "l2", "name": "Czech", "codename": "cz"},
                "issue_type": "variant_issue",
                "issues": [
                    {"element": {"codename": "body"}, "messages": ["Empty"]},
                    {"element": {"codename": "slug"}, "messages": ["Not unique"]},
                ],
            },
        ],
        "pagination": {"continuation_token": None, "next_page": None},
    }
