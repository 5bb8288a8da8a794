"""CheckReporter protocol and the check-run job adapter.

The checks API is reached by running a small utility image as a job: the
notification snapshot is passed to it through ``CHECK_*`` environment
variables. Each send becomes a separately named job, which is why the
snapshot carries its own send identity.
"""

from __future__ import annotations

import typing as typ

from brigade_ci.config import PipelineConfig
from brigade_ci.jobs.models import JobSpec

if typ.TYPE_CHECKING:
    from brigade_ci.checks.notification import NotificationSnapshot
    from brigade_ci.jobs.models import JobResult
    from brigade_ci.jobs.protocol import JobExecutor


@typ.runtime_checkable
class CheckReporter(typ.Protocol):
    """Protocol for delivering notification snapshots to the checks API."""

    async def report(self, snapshot: NotificationSnapshot) -> JobResult:
        """Deliver ``snapshot`` and return the delivery result.

        Failures propagate to the caller unchanged.
        """
        ...


def check_run_env(snapshot: NotificationSnapshot) -> dict[str, str]:
    """Return the environment consumed by the check-run utility image."""
    return {
        "CHECK_CONCLUSION": snapshot.conclusion,
        "CHECK_NAME": snapshot.name,
        "CHECK_TITLE": snapshot.title,
        "CHECK_PAYLOAD": snapshot.payload,
        "CHECK_SUMMARY": snapshot.summary,
        "CHECK_TEXT": snapshot.text,
        "CHECK_DETAILS_URL": snapshot.details_url,
        "CHECK_EXTERNAL_ID": snapshot.external_id,
    }


class CheckRunJobReporter:
    """Report snapshots by running the check-run image through an executor."""

    def __init__(
        self, executor: JobExecutor, config: PipelineConfig | None = None
    ) -> None:
        """Bind the reporter to ``executor``."""
        self._executor = executor
        self._config = config or PipelineConfig()

    def build_job(self, snapshot: NotificationSnapshot) -> JobSpec:
        """Return the job that posts ``snapshot``."""
        return JobSpec(
            name=snapshot.send_id,
            image=self._config.check_run_image,
            image_force_pull=True,
            env=check_run_env(snapshot),
        )

    async def report(self, snapshot: NotificationSnapshot) -> JobResult:
        """Run the check-run job for ``snapshot``."""
        return await self._executor.run(self.build_job(snapshot))
