"""brigade-ci: event dispatch and check reporting for a CI controller.

Repository events are routed to job pipelines by :class:`EventRouter`.
Jobs that back a check are bracketed by pending and final notifications
sent to the checks API.

Example:
>>> from brigade_ci import EventRouter
>>> from brigade_ci.checks import CheckRunJobReporter, PipelineDependencies
>>> from brigade_ci.jobs import DryRunExecutor
>>> executor = DryRunExecutor()
>>> deps = PipelineDependencies(
...     executor=executor, reporter=CheckRunJobReporter(executor)
... )
>>> await EventRouter(deps).dispatch(event, project)

"""

from __future__ import annotations

from brigade_ci.events import Event, Project, Revision
from brigade_ci.router import EventRouter

__all__ = ["Event", "EventRouter", "Project", "Revision"]
