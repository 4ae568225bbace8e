"""
Validation Orchestrator

Drives one environment validation run through its stages:
identify -> trigger -> poll -> fetch -> export.

Stages run strictly in sequence on a single asyncio task. Blocking client
calls are moved off the event loop with asyncio.to_thread; the poll loop
waits with asyncio.sleep (or on the cancel event) between status checks.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from validation_export.client import ManagementClient
from validation_export.config import ExportConfig
from validation_export.errors import (
    PollTimeoutError,
    ValidationCancelledError,
    ValidationFailedError,
)
from validation_export.exporter import ResultExporter
from validation_export.models import EnvironmentInfo, TaskStatus, ValidationItem


logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 3.0


@dataclass
class RunResult:
    """Outcome of a completed run.

    Attributes:
        task_id: Validation task identifier
        environment: Project/environment identification, if fetched
        item_count: Number of validation items returned
        record_count: Number of exported records (one per issue)
        written_files: Export files created, in write order
    """
    task_id: str
    environment: Optional[EnvironmentInfo] = None
    item_count: int = 0
    record_count: int = 0
    written_files: List[Path] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return self.item_count > 0


class ValidationRunner:
    """Runs one environment validation and exports its issues.

    Example:
        >>> runner = ValidationRunner(client, ResultExporter(csv_path, json_path))
        >>> result = asyncio.run(runner.run())
    """

    def __init__(
        self,
        client: ManagementClient,
        exporter: ResultExporter,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_attempts: Optional[int] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize runner.

        Args:
            client: Management API client bound to the environment
            exporter: Writer for the CSV and JSON exports
            poll_interval: Seconds to wait after each status check
            max_attempts: Maximum number of status checks (None = unbounded)
            timeout: Maximum seconds to wait for the task (None = unbounded)
            cancel_event: Event that aborts the poll loop when set. It may be
                created before the loop starts; events bind to the running
                loop on first use (Python 3.10+)
            clock: Monotonic time source
        """
        self.client = client
        self.exporter = exporter
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.timeout = timeout
        self.cancel_event = cancel_event
        self.clock = clock

    @classmethod
    def from_config(
        cls,
        config: ExportConfig,
        client: ManagementClient,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> "ValidationRunner":
        return cls(
            client=client,
            exporter=ResultExporter(config.csv_path, config.json_path),
            poll_interval=config.poll_interval,
            max_attempts=config.max_attempts,
            timeout=config.timeout,
            cancel_event=cancel_event,
        )

    async def describe_environment(self) -> EnvironmentInfo:
        info = await asyncio.to_thread(self.client.environment_information)
        logger.info(
            f"Starting validation for project '{info.name}' and environment '{info.environment}'"
        )
        return info

    async def start_validation(self) -> str:
        """Create the remote validation task and return its id."""
        task = await asyncio.to_thread(self.client.start_environment_validation)
        logger.debug(f"Validation task '{task.id}' started")
        return task.id

    async def poll_until_done(self, task_id: str) -> None:
        """Wait until the task reports "finished".

        The status is checked, then the loop waits poll_interval seconds,
        for every check including the last one. Statuses other than
        "finished" and "failed" count as still running.

        Raises:
            ValidationFailedError: If the task reports "failed"
            PollTimeoutError: If max_attempts or timeout is exceeded
            ValidationCancelledError: If the cancel event is set
        """
        started = self.clock()
        attempts = 0

        while True:
            self._raise_if_cancelled(task_id)
            logger.info("Waiting for validation to finish")

            task = await asyncio.to_thread(self.client.check_environment_validation, task_id)
            attempts += 1

            if task.is_failed:
                raise ValidationFailedError(task_id)

            finished = task.is_finished
            if not finished:
                if task.status not in {s.value for s in TaskStatus}:
                    logger.debug(f"Unrecognized validation status '{task.status}', still waiting")
                self._check_bounds(task_id, attempts, started)

            await self._pause(task_id)

            if finished:
                logger.info("Validation response fetched")
                return

    async def fetch_issues(self, task_id: str) -> List[ValidationItem]:
        """Get every validation item of the finished task."""
        return await asyncio.to_thread(self.client.list_environment_validation_issues, task_id)

    async def export_results(self, items: Sequence[ValidationItem]) -> List[Path]:
        return await asyncio.to_thread(self.exporter.export, items)

    async def run(self) -> RunResult:
        """Run all stages in order and return the outcome."""
        environment = await self.describe_environment()
        task_id = await self.start_validation()
        await self.poll_until_done(task_id)

        items = await self.fetch_issues(task_id)
        logger.debug(f"Fetched {len(items)} validation item(s) for task '{task_id}'")

        written = await self.export_results(items)

        return RunResult(
            task_id=task_id,
            environment=environment,
            item_count=len(items),
            record_count=sum(len(item.issues) for item in items),
            written_files=written,
        )

    def _check_bounds(self, task_id: str, attempts: int, started: float) -> None:
        if self.max_attempts is not None and attempts >= self.max_attempts:
            raise PollTimeoutError(
                task_id,
                attempts,
                f"Validation task '{task_id}' did not finish after {attempts} status checks",
            )
        if self.timeout is not None and self.clock() - started >= self.timeout:
            raise PollTimeoutError(
                task_id,
                attempts,
                f"Validation task '{task_id}' did not finish within {self.timeout}s",
            )

    def _raise_if_cancelled(self, task_id: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise ValidationCancelledError(f"Validation run cancelled (task '{task_id}')")

    async def _pause(self, task_id: str) -> None:
        if self.cancel_event is None:
            await asyncio.sleep(self.poll_interval)
            return

        try:
            await asyncio.wait_for(self.cancel_event.wait(), timeout=self.poll_interval)
        except asyncio.TimeoutError:
            return
        self._raise_if_cancelled(task_id)
