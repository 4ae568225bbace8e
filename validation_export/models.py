"""
Validation Export Data Models

Pydantic models for the Management API payloads consumed by the run and for
the flattened records written to the export files.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaskStatus(str, Enum):
    """Validation task statuses reported by the Management API.

    Only FINISHED and FAILED are terminal. The service may report other
    values; those are treated as still running.
    """
    QUEUED = "queued"
    VALIDATING = "validating"
    FINISHED = "finished"
    FAILED = "failed"


class Reference(BaseModel):
    """Reference to a content item, language or element."""
    model_config = ConfigDict(extra="ignore")

    codename: str
    id: Optional[str] = None
    name: Optional[str] = None


class EnvironmentInfo(BaseModel):
    """Project and environment identification."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = Field(..., description="Project name")
    environment: str = Field(..., description="Environment name")


class ValidationTask(BaseModel):
    """An environment validation task.

    Attributes:
        id: Task identifier used for status checks and issue listing
        status: Raw status string from the service
    """
    model_config = ConfigDict(extra="ignore")

    id: str
    status: str

    @property
    def is_finished(self) -> bool:
        return self.status == TaskStatus.FINISHED.value

    @property
    def is_failed(self) -> bool:
        return self.status == TaskStatus.FAILED.value


class Issue(BaseModel):
    """A problem found in one element of a content item variant."""
    model_config = ConfigDict(extra="ignore")

    element: Reference
    messages: List[str] = Field(default_factory=list)


class ValidationItem(BaseModel):
    """All issues found in one item variant."""
    model_config = ConfigDict(extra="ignore")

    item: Reference
    language: Reference
    issue_type: str
    issues: List[Issue] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def require_variant(cls, data):
        # Content type issues (issue_type "type_issue") reference a type, not an item variant
        if isinstance(data, dict) and ("item" not in data or "language" not in data):
            raise ValueError(
                f"issue of type '{data.get('issue_type')}' does not reference an item variant; "
                "only item variant issues can be exported"
            )
        return data


class IssuesPage(BaseModel):
    """One page of the validation issue listing."""
    items: List[ValidationItem] = Field(default_factory=list)
    continuation_token: Optional[str] = None


class ExportRecord(BaseModel):
    """One exported row: a single issue of a single item variant.

    Field order is the CSV column order.
    """
    issue_type: str
    item: str
    language: str
    element: str
    message: str
