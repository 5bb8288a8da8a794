"""JobExecutor protocol for the external job runtime.

The runtime that actually starts containers lives outside this package.
Adapters implement :class:`JobExecutor`; the orchestration code only awaits
``run`` and ``logs``.
"""

from __future__ import annotations

import typing as typ

from brigade_ci.errors import BrigadeCIError

if typ.TYPE_CHECKING:
    from brigade_ci.jobs.models import JobResult, JobSpec


class JobFailedError(BrigadeCIError):
    """Raised by an executor when a job does not complete successfully.

    Attributes
    ----------
    job_name
        Name of the failed job.
    build_id
        Build identifier the job belonged to.

    """

    def __init__(self, message: str, *, job_name: str, build_id: str = "") -> None:
        """Initialise with a description, the job name and its build id."""
        self.job_name = job_name
        self.build_id = build_id
        super().__init__(message)


@typ.runtime_checkable
class JobExecutor(typ.Protocol):
    """Protocol for the runtime that executes job specifications."""

    async def run(self, job: JobSpec) -> JobResult:
        """Run ``job`` to completion.

        Raises
        ------
        JobFailedError
            If the job exits unsuccessfully.

        """
        ...

    async def logs(self, job: JobSpec) -> str:
        """Return the logs captured for ``job``, whatever its outcome."""
        ...
