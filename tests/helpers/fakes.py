"""In-memory executor and reporter doubles with scripted failures."""

from __future__ import annotations

import typing as typ

from brigade_ci.jobs import JobFailedError, JobResult

if typ.TYPE_CHECKING:
    from brigade_ci.checks import NotificationSnapshot
    from brigade_ci.jobs import JobSpec


class FakeExecutor:
    """Executor that records every job and fails the ones it is told to.

    ``calls`` records ``("run", name)`` and ``("logs", name)`` in order so
    tests can assert on sequencing across the executor and the reporter
    when both share a ``calls`` list.
    """

    def __init__(
        self,
        *,
        fail: typ.Iterable[str] = (),
        output: str = "ok",
        logs: str = "job logs",
        logs_error: Exception | None = None,
        calls: list[tuple[str, str]] | None = None,
    ) -> None:
        self.fail = set(fail)
        self.output = output
        self.log_text = logs
        self.logs_error = logs_error
        self.calls = calls if calls is not None else []
        self.jobs: list[JobSpec] = []

    @property
    def job_names(self) -> list[str]:
        return [job.name for job in self.jobs]

    async def run(self, job: JobSpec) -> JobResult:
        self.calls.append(("run", job.name))
        self.jobs.append(job)
        if job.name in self.fail:
            raise JobFailedError(
                f"job {job.name} exited 2", job_name=job.name, build_id="build-42"
            )
        return JobResult(job_name=job.name, output=self.output)

    async def logs(self, job: JobSpec) -> str:
        self.calls.append(("logs", job.name))
        if self.logs_error is not None:
            raise self.logs_error
        return self.log_text


class FakeReporter:
    """Reporter that stores snapshots and fails on chosen send numbers."""

    def __init__(
        self,
        *,
        fail_on: typ.Iterable[int] = (),
        calls: list[tuple[str, str]] | None = None,
    ) -> None:
        self.fail_on = set(fail_on)
        self.calls = calls if calls is not None else []
        self.snapshots: list[NotificationSnapshot] = []

    @property
    def conclusions(self) -> list[str]:
        return [snapshot.conclusion for snapshot in self.snapshots]

    async def report(self, snapshot: NotificationSnapshot) -> JobResult:
        self.calls.append(("report", snapshot.send_id))
        self.snapshots.append(snapshot)
        if snapshot.count in self.fail_on:
            msg = f"checks API rejected {snapshot.send_id}"
            raise RuntimeError(msg)
        return JobResult(job_name=snapshot.send_id, output="reported")
