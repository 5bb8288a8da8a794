"""Structured log events for event routing, jobs and check notifications.

Usage
-----
>>> event_logger = CheckEventLogger()
>>> event_logger.log_job_started(job_name="tests", build_id="01abc")

"""

from __future__ import annotations

import enum
import typing as typ

from brigade_ci.logging import (
    format_log_message,
    get_logger,
    log_error,
    log_exception,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    from brigade_ci.checks.notification import NotificationSnapshot

logger = get_logger(__name__)


class CheckEventType(enum.StrEnum):
    """Structured log event types emitted by the controller."""

    EVENT_ROUTED = "events.routed"
    EVENT_IGNORED = "events.ignored"
    SUITE_SKIPPED = "checks.suite.skipped"
    COMMENT_IGNORED = "checks.comment.ignored"
    JOB_STARTED = "checks.job.started"
    JOB_COMPLETED = "checks.job.completed"
    JOB_FAILED = "checks.job.failed"
    LOGS_UNAVAILABLE = "checks.job.logs_unavailable"
    NOTIFICATION_SENT = "checks.notification.sent"
    NOTIFICATION_FAILED = "checks.notification.failed"


class CheckEventLogger:
    """Emit controller lifecycle events via femtologging."""

    def log_event_routed(self, *, route: str, handler: str, build_id: str) -> None:
        """Log the handler selected for an event."""
        log_info(
            logger,
            "[%s] route=%s handler=%s build_id=%s",
            CheckEventType.EVENT_ROUTED,
            route,
            handler,
            build_id,
        )

    def log_event_ignored(self, *, route: str, ref: str) -> None:
        """Log an event that no handler accepts."""
        log_info(
            logger,
            "[%s] route=%s ref=%s",
            CheckEventType.EVENT_IGNORED,
            route,
            ref,
        )

    def log_suite_skipped(self, *, ref: str) -> None:
        """Log a check suite that runs nothing for ``ref``."""
        log_info(logger, "[%s] ref=%s", CheckEventType.SUITE_SKIPPED, ref)

    def log_comment_ignored(self, *, comment: str) -> None:
        """Log a comment that matches no command."""
        log_info(
            logger,
            "[%s] No applicable action found for comment: %s",
            CheckEventType.COMMENT_IGNORED,
            comment,
        )

    def log_job_started(self, *, job_name: str, build_id: str) -> None:
        """Log the start of a job."""
        log_info(
            logger,
            "[%s] job=%s build_id=%s",
            CheckEventType.JOB_STARTED,
            job_name,
            build_id,
        )

    def log_job_completed(self, *, job_name: str, build_id: str) -> None:
        """Log a job that finished successfully."""
        log_info(
            logger,
            "[%s] job=%s build_id=%s",
            CheckEventType.JOB_COMPLETED,
            job_name,
            build_id,
        )

    def log_job_failed(
        self, *, job_name: str, build_id: str, error: BaseException
    ) -> None:
        """Log a failed job with its error.

        Parameters
        ----------
        job_name
            Name of the failed job.
        build_id
            Build identifier of the originating event.
        error
            Exception raised by the executor.

        """
        log_error(
            logger,
            "[%s] job=%s build_id=%s error_type=%s error_message=%s",
            CheckEventType.JOB_FAILED,
            job_name,
            build_id,
            type(error).__name__,
            str(error),
            exc_info=error,
        )

    def log_logs_unavailable(self, *, job_name: str, error: BaseException) -> None:
        """Log a log fetch that failed; the report goes out without logs."""
        log_warning(
            logger,
            "[%s] job=%s error_type=%s error_message=%s",
            CheckEventType.LOGS_UNAVAILABLE,
            job_name,
            type(error).__name__,
            str(error),
        )

    def log_notification_sent(self, snapshot: NotificationSnapshot) -> None:
        """Log a delivered notification snapshot."""
        log_info(
            logger,
            "[%s] send_id=%s conclusion=%s external_id=%s",
            CheckEventType.NOTIFICATION_SENT,
            snapshot.send_id,
            snapshot.conclusion or "pending",
            snapshot.external_id,
        )

    def log_notification_failed(
        self,
        *,
        send_id: str,
        error: BaseException,
        original: BaseException,
    ) -> None:
        """Log a failure notification that could not be delivered.

        Parameters
        ----------
        send_id
            Identity of the send that failed.
        error
            Exception raised by the reporter.
        original
            Job failure the notification was meant to report. It is still
            the error propagated to the caller.

        """
        log_exception(
            logger,
            format_log_message(
                "[%s] failed to send notification %s: %s; original error: %s",
                CheckEventType.NOTIFICATION_FAILED,
                send_id,
                str(error),
                str(original),
            ),
            error,
        )
