"""Dry-run implementation of JobExecutor for local use and testing."""

from __future__ import annotations

import typing as typ

from brigade_ci.jobs.models import JobResult
from brigade_ci.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from brigade_ci.jobs.models import JobSpec

logger = get_logger(__name__)


class DryRunExecutor:
    """Executor that records jobs instead of running them.

    Every job succeeds with output naming its image and task count, so the
    full routing and notification flow can be exercised without a cluster.

    Examples
    --------
    >>> import asyncio
    >>> from brigade_ci.jobs import DryRunExecutor, build_test_job
    >>> executor = DryRunExecutor()
    >>> result = asyncio.run(executor.run(build_test_job()))
    >>> [job.name for job in executor.jobs]
    ['tests']

    """

    def __init__(self) -> None:
        """Initialise an empty job record."""
        self.jobs: list[JobSpec] = []

    async def run(self, job: JobSpec) -> JobResult:
        """Record ``job`` and return a canned result."""
        self.jobs.append(job)
        log_info(
            logger,
            "dry run: job=%s image=%s tasks=%d privileged=%s",
            job.name,
            job.image,
            len(job.tasks),
            job.privileged,
        )
        return JobResult(
            job_name=job.name,
            output=f"dry run of {job.name} ({job.image}, {len(job.tasks)} tasks)",
        )

    async def logs(self, job: JobSpec) -> str:
        """Return the task list that would have run."""
        return "\n".join(job.tasks)
