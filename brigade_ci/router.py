"""Route repository events to their handlers.

The routing table is fixed when the router is built:

==============================  =========================================
``exec`` (any action)           run the test job
``push`` (any action)           release tag or master branch policy
``check_suite:requested``       run the check suite
``check_suite:rerequested``     run the check suite
``check_run:rerequested``       re-run the named check
``issue_comment:created``       handle comment commands
``issue_comment:edited``        handle comment commands
==============================  =========================================

Any other event is ignored.

Push policy
-----------
A ``refs/tags/vX[.Y[.Z]][-suffix]`` push publishes images for that version.
A push to ``refs/heads/master`` runs the tests and, only if they pass,
publishes ``edge`` images.
"""

from __future__ import annotations

import collections.abc as cabc
import re
import types
import typing as typ

from brigade_ci.checks.comments import CommentCommandParser
from brigade_ci.checks.dispatcher import CheckDispatcher
from brigade_ci.jobs.builders import build_and_publish_images_job, build_test_job

if typ.TYPE_CHECKING:
    from brigade_ci.checks.dispatcher import CheckHandler, PipelineDependencies
    from brigade_ci.events import Event, Project
    from brigade_ci.jobs.models import JobResult, JobSpec

RELEASE_TAG_PATTERN = re.compile(r"^refs/tags/(v[0-9]+(?:\.[0-9]+)*(?:-.+)?)$")
MASTER_BRANCH_REF = "refs/heads/master"
EDGE_VERSION = ""

type RouteKey = tuple[str, str | None]


def release_version(ref: str) -> str | None:
    """Return the version named by a release tag ref, or ``None``.

    >>> release_version("refs/tags/v1.2.3")
    'v1.2.3'
    >>> release_version("refs/heads/master") is None
    True

    """
    match = RELEASE_TAG_PATTERN.match(ref)
    if match is None:
        return None
    return match.group(1)


class EventRouter:
    """Select and invoke exactly one handler per event."""

    def __init__(self, deps: PipelineDependencies) -> None:
        """Build the routing table for ``deps``."""
        self._deps = deps
        self.dispatcher = CheckDispatcher(deps)
        self.comments = CommentCommandParser(self.dispatcher, deps.event_logger)
        self._routes: cabc.Mapping[RouteKey, CheckHandler] = types.MappingProxyType(
            {
                ("exec", None): self.handle_exec,
                ("push", None): self.handle_push,
                ("check_suite", "requested"): self.dispatcher.run_suite,
                ("check_suite", "rerequested"): self.dispatcher.run_suite,
                ("check_run", "rerequested"): self.dispatcher.check_requested,
                ("issue_comment", "created"): self.comments.handle_issue_comment,
                ("issue_comment", "edited"): self.comments.handle_issue_comment,
            }
        )

    @property
    def routes(self) -> cabc.Mapping[RouteKey, CheckHandler]:
        """Return the read-only routing table."""
        return self._routes

    def resolve(self, event: Event) -> CheckHandler | None:
        """Return the handler for ``event``, or ``None`` if it is ignored.

        An exact ``(category, action)`` entry wins over a category-wide one.
        """
        handler = self._routes.get((event.category, event.action))
        if handler is None:
            handler = self._routes.get((event.category, None))
        return handler

    async def dispatch(self, event: Event, project: Project) -> JobResult | None:
        """Handle ``event`` and return the last job result, if any."""
        handler = self.resolve(event)
        if handler is None:
            self._deps.event_logger.log_event_ignored(
                route=event.route_key, ref=event.revision.ref
            )
            return None
        self._deps.event_logger.log_event_routed(
            route=event.route_key,
            handler=handler.__name__,
            build_id=event.build_id,
        )
        return await handler(event, project)

    async def handle_exec(self, event: Event, project: Project) -> JobResult:
        """Run the test job for a manually executed build."""
        del project
        return await self._run_job(build_test_job(self._deps.config), event)

    async def handle_push(self, event: Event, project: Project) -> JobResult | None:
        """Apply the push policy to ``event``.

        Raises
        ------
        Exception
            Whatever the executor raised for a failed job. When the master
            test job fails, the image job is never started.

        """
        config = self._deps.config
        ref = event.revision.ref
        version = release_version(ref)
        if version is not None:
            return await self._run_job(
                build_and_publish_images_job(project, version, config), event
            )
        if ref == MASTER_BRANCH_REF:
            await self._run_job(build_test_job(config), event)
            return await self._run_job(
                build_and_publish_images_job(project, EDGE_VERSION, config), event
            )
        self._deps.event_logger.log_event_ignored(route=event.route_key, ref=ref)
        return None

    async def _run_job(self, job: JobSpec, event: Event) -> JobResult:
        event_logger = self._deps.event_logger
        event_logger.log_job_started(job_name=job.name, build_id=event.build_id)
        try:
            result = await self._deps.executor.run(job)
        except Exception as exc:
            event_logger.log_job_failed(
                job_name=job.name, build_id=event.build_id, error=exc
            )
            raise
        event_logger.log_job_completed(job_name=job.name, build_id=event.build_id)
        return result
