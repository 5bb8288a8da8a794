"""Run a job between a pending and a final check notification.

:func:`notification_wrap` is the only place that moves a notification to a
terminal conclusion. The three steps (pending send, job, final send) run
strictly in order.

Job logs are fetched after the job finishes, whatever its outcome. A
successful job reports its returned output, or the fetched logs when that
output is empty.

Failure handling
----------------
- Notification already concluded: ``NotificationStateError`` is raised
  before anything is sent or run.
- Pending send fails: the error propagates and the job never starts.
- Job fails: the failure is reported on a best-effort basis and then
  re-raised. A reporting failure at this point is captured in a
  :class:`FailureReport`, logged, and never replaces the job failure.
- Log fetch fails: the failure report is sent without logs.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from brigade_ci.checks.notification import Conclusion
from brigade_ci.checks.observability import CheckEventLogger
from brigade_ci.errors import NotificationStateError
from brigade_ci.jobs.protocol import JobFailedError

if typ.TYPE_CHECKING:
    from brigade_ci.checks.notification import Notification
    from brigade_ci.jobs.models import JobResult, JobSpec
    from brigade_ci.jobs.protocol import JobExecutor


@dc.dataclass(frozen=True, slots=True)
class FailureReport:
    """Outcome of reporting a failed job.

    Attributes
    ----------
    job_error
        The job failure. Always the error raised to the caller.
    report_error
        Error raised while sending the failure notification, if any.

    """

    job_error: Exception
    report_error: Exception | None = None

    @property
    def delivered(self) -> bool:
        """Return whether the failure notification reached the reporter."""
        return self.report_error is None


def _fence(content: str) -> str:
    return f"```{content}```"


def _failure_build_id(error: Exception, note: Notification) -> str:
    if isinstance(error, JobFailedError) and error.build_id:
        return error.build_id
    return note.external_id


async def _fetch_logs(
    executor: JobExecutor,
    job: JobSpec,
    event_logger: CheckEventLogger,
) -> str:
    try:
        return await executor.logs(job)
    except Exception as exc:  # noqa: BLE001 - missing logs must not block the report
        event_logger.log_logs_unavailable(job_name=job.name, error=exc)
        return ""


async def _send(note: Notification, event_logger: CheckEventLogger) -> JobResult:
    result = await note.send()
    event_logger.log_notification_sent(note.snapshot())
    return result


async def report_failure(
    job: JobSpec,
    note: Notification,
    executor: JobExecutor,
    error: Exception,
    *,
    event_logger: CheckEventLogger | None = None,
) -> FailureReport:
    """Conclude ``note`` as failed for ``error`` and try to send it.

    Parameters
    ----------
    job
        The job that failed; its logs are fetched from ``executor``.
    note
        Notification for the check the job belongs to.
    executor
        Executor that ran ``job``.
    error
        The failure raised by ``executor.run``.
    event_logger
        Destination for lifecycle events.

    Returns
    -------
    FailureReport
        ``error`` together with any reporting failure. This function never
        raises for a reporter failure.

    """
    event_logger = event_logger or CheckEventLogger()
    logs = await _fetch_logs(executor, job, event_logger)
    note.conclude(
        Conclusion.FAILURE,
        summary=f'Task "{job.name}" failed for {_failure_build_id(error, note)}',
        text=f"{_fence(logs)}\nFailed with error: {error}",
    )
    try:
        await _send(note, event_logger)
    except Exception as exc:  # noqa: BLE001 - the job failure takes precedence
        event_logger.log_notification_failed(
            send_id=note.snapshot().send_id, error=exc, original=error
        )
        return FailureReport(job_error=error, report_error=exc)
    return FailureReport(job_error=error)


async def notification_wrap(
    job: JobSpec,
    note: Notification,
    executor: JobExecutor,
    *,
    event_logger: CheckEventLogger | None = None,
) -> JobResult:
    """Send ``note`` as pending, run ``job``, then send the final conclusion.

    Parameters
    ----------
    job
        Job to execute.
    note
        Notification reporting the job's check. Owned by this call until it
        returns.
    executor
        Executor that runs ``job``.
    event_logger
        Destination for lifecycle events.

    Returns
    -------
    JobResult
        The reporter's result for the final (success) notification.

    Raises
    ------
    NotificationStateError
        If ``note`` already carries a terminal conclusion.
    Exception
        The pending-send failure, the job failure, or the success-send
        failure. A failure while reporting a job failure is never raised.

    """
    if note.is_concluded:
        raise NotificationStateError.already_concluded(
            note.name, str(note.conclusion)
        )
    event_logger = event_logger or CheckEventLogger()
    await _send(note, event_logger)

    build_id = note.external_id
    event_logger.log_job_started(job_name=job.name, build_id=build_id)
    try:
        result = await executor.run(job)
    except Exception as exc:
        event_logger.log_job_failed(job_name=job.name, build_id=build_id, error=exc)
        await report_failure(job, note, executor, exc, event_logger=event_logger)
        raise

    event_logger.log_job_completed(job_name=job.name, build_id=build_id)
    logs = await _fetch_logs(executor, job, event_logger)
    note.conclude(
        Conclusion.SUCCESS,
        summary=f'Task "{job.name}" passed',
        text=f"{_fence(result.output or logs)}\nTest Complete",
    )
    return await _send(note, event_logger)
