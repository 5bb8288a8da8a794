"""Slash commands recognised in issue and pull request comments."""

from __future__ import annotations

import collections.abc as cabc
import types
import typing as typ

from brigade_ci.checks.observability import CheckEventLogger
from brigade_ci.events import EventPayload

if typ.TYPE_CHECKING:
    from brigade_ci.checks.dispatcher import CheckDispatcher, CheckHandler
    from brigade_ci.events import Event, Project
    from brigade_ci.jobs.models import JobResult

RUN_SUITE_COMMAND = "/brig run"


class CommentCommandParser:
    """Match comment text against the command vocabulary.

    Comments are free text and most are not commands, so anything that
    does not match is logged and ignored.
    """

    def __init__(
        self,
        dispatcher: CheckDispatcher,
        event_logger: CheckEventLogger | None = None,
    ) -> None:
        """Bind the command vocabulary to ``dispatcher``."""
        self._event_logger = event_logger or CheckEventLogger()
        self._commands: cabc.Mapping[str, CheckHandler] = types.MappingProxyType(
            {RUN_SUITE_COMMAND: dispatcher.run_suite}
        )

    @property
    def commands(self) -> frozenset[str]:
        """Return the recognised commands."""
        return frozenset(self._commands)

    async def handle_issue_comment(
        self, event: Event, project: Project
    ) -> JobResult | None:
        """Run the command in the comment on ``event``, if there is one."""
        comment = EventPayload.parse(event.payload).comment_body
        handler = self._commands.get(comment)
        if handler is None:
            self._event_logger.log_comment_ignored(comment=comment)
            return None
        return await handler(event, project)
