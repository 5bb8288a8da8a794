"""Check suite and check run handling.

Each check is a named, independently reported unit of verification. Only
``tests`` exists today; further checks are registered in
:meth:`CheckDispatcher.__init__` and run as part of the suite.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import types
import typing as typ

from brigade_ci.checks.notification import Notification
from brigade_ci.checks.observability import CheckEventLogger
from brigade_ci.checks.wrapper import notification_wrap
from brigade_ci.config import PipelineConfig
from brigade_ci.errors import UnknownCheckError
from brigade_ci.events import EventPayload
from brigade_ci.jobs.builders import TEST_JOB_NAME, build_test_job
from brigade_ci.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from brigade_ci.checks.reporter import CheckReporter
    from brigade_ci.events import Event, Project
    from brigade_ci.jobs.models import JobResult
    from brigade_ci.jobs.protocol import JobExecutor

type CheckHandler = cabc.Callable[
    [Event, Project], cabc.Awaitable[JobResult | None]
]

logger = get_logger(__name__)

# Check suites on master are covered by the push handler, which runs the
# tests before publishing edge images.
SUITE_EXCLUDED_REF = "master"

TEST_CHECK_TITLE = "Run Tests"
TEST_CHECK_TEXT = "This test will ensure build, linting and tests all pass."


@dc.dataclass(frozen=True, slots=True)
class PipelineDependencies:
    """Collaborators shared by every handler for one controller.

    Attributes
    ----------
    executor
        Runtime that executes job specifications.
    reporter
        Destination for check notifications.
    config
        Image, path and URL settings.
    event_logger
        Destination for lifecycle events.

    """

    executor: JobExecutor
    reporter: CheckReporter
    config: PipelineConfig = dc.field(default_factory=PipelineConfig)
    event_logger: CheckEventLogger = dc.field(default_factory=CheckEventLogger)


class CheckDispatcher:
    """Decide which checks run for check_suite and check_run events."""

    def __init__(self, deps: PipelineDependencies) -> None:
        """Register the known checks."""
        self._deps = deps
        self._checks: cabc.Mapping[str, CheckHandler] = types.MappingProxyType(
            {TEST_JOB_NAME: self.run_tests}
        )

    @property
    def check_names(self) -> frozenset[str]:
        """Return the names of the registered checks."""
        return frozenset(self._checks)

    async def run_suite(self, event: Event, project: Project) -> JobResult | None:
        """Run every check in the suite for ``event``.

        Returns ``None`` without running anything for ``master``.
        """
        if event.revision.ref == SUITE_EXCLUDED_REF:
            self._deps.event_logger.log_suite_skipped(ref=event.revision.ref)
            return None
        return await self.run_tests(event, project)

    async def check_requested(
        self, event: Event, project: Project
    ) -> JobResult | None:
        """Re-run the single check named in the check_run payload.

        Raises
        ------
        UnknownCheckError
            If the payload names a check that is not registered. No
            notification is sent in that case.
        EventPayloadError
            If the payload does not carry a check run name.

        """
        name = EventPayload.parse(event.payload).check_run_name
        handler = self._checks.get(name)
        if handler is None:
            raise UnknownCheckError.for_name(name, self._checks)
        return await handler(event, project)

    async def run_tests(self, event: Event, project: Project) -> JobResult:
        """Run the ``tests`` check and report it."""
        del project
        log_info(logger, "Check requested: %s (%s)", TEST_JOB_NAME, event.build_id)
        deps = self._deps
        note = Notification(
            TEST_JOB_NAME,
            event,
            deps.reporter,
            details_url=deps.config.details_url(event.build_id),
            title=TEST_CHECK_TITLE,
            summary=f"Running the test targets for {event.revision.commit}",
            text=TEST_CHECK_TEXT,
        )
        note.mark_pending()
        return await notification_wrap(
            build_test_job(deps.config),
            note,
            deps.executor,
            event_logger=deps.event_logger,
        )
