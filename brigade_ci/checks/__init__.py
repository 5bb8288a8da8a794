"""Checks reported to the repository's checks API.

Public API
----------
CheckDispatcher
    Runs the check suite or a single named check for an event.
CommentCommandParser
    Triggers the suite from ``/brig run`` comments.
Notification
    Status record for one check, sent once pending and once concluded.
NotificationSnapshot
    Immutable state captured for a single send.
Conclusion
    Conclusion values accepted by the checks API.
CheckReporter
    Protocol for delivering snapshots.
CheckRunJobReporter
    Reporter that posts snapshots by running the check-run image.
PipelineDependencies
    Executor, reporter and configuration shared by the handlers.
notification_wrap
    Run a job between pending and final notifications.

"""

from __future__ import annotations

from brigade_ci.checks.comments import RUN_SUITE_COMMAND, CommentCommandParser
from brigade_ci.checks.dispatcher import CheckDispatcher, PipelineDependencies
from brigade_ci.checks.notification import (
    Conclusion,
    Notification,
    NotificationSnapshot,
)
from brigade_ci.checks.observability import CheckEventLogger, CheckEventType
from brigade_ci.checks.reporter import (
    CheckReporter,
    CheckRunJobReporter,
    check_run_env,
)
from brigade_ci.checks.wrapper import FailureReport, notification_wrap, report_failure

__all__ = [
    "RUN_SUITE_COMMAND",
    "CheckDispatcher",
    "CheckEventLogger",
    "CheckEventType",
    "CheckReporter",
    "CheckRunJobReporter",
    "CommentCommandParser",
    "Conclusion",
    "FailureReport",
    "Notification",
    "NotificationSnapshot",
    "PipelineDependencies",
    "check_run_env",
    "notification_wrap",
    "report_failure",
]
