"""
Environment validation export.

Runs a Management API environment validation, waits for it to finish and
exports the reported issues to CSV and JSON.
"""

from validation_export.client import ManagementClient
from validation_export.config import ExportConfig, ManagementConfig
from validation_export.exporter import ResultExporter, flatten_items
from validation_export.orchestrator import RunResult, ValidationRunner

__all__ = [
    "ExportConfig",
    "ManagementClient",
    "ManagementConfig",
    "ResultExporter",
    "RunResult",
    "ValidationRunner",
    "flatten_items",
]
