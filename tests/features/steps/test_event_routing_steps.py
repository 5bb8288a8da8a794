"""Behavioural coverage for event routing and check reporting."""

from __future__ import annotations

import asyncio
import typing as typ

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from brigade_ci.errors import UnknownCheckError
from brigade_ci.jobs import JobFailedError
from tests.conftest import build_harness
from tests.helpers.event_builders import (
    check_run_payload,
    comment_payload,
    make_event,
    make_project,
)

if typ.TYPE_CHECKING:
    from brigade_ci.events import Event
    from tests.conftest import ControllerHarness

scenarios("../event_routing.feature")


class RoutingContext(typ.TypedDict, total=False):
    """Shared mutable scenario state."""

    harness: ControllerHarness
    error: Exception | None


@pytest.fixture
def routing_context() -> RoutingContext:
    """Provide empty scenario state."""
    return {}


def _handle(context: RoutingContext, event: Event) -> None:
    router = context["harness"].router
    try:
        asyncio.run(router.dispatch(event, make_project()))
    except Exception as exc:  # noqa: BLE001 - outcome asserted by later steps
        context["error"] = exc
    else:
        context["error"] = None


@given("a controller whose jobs succeed")
def given_succeeding_controller(routing_context: RoutingContext) -> None:
    """Wire a router to succeeding fakes."""
    routing_context["harness"] = build_harness()


@given(parsers.parse('a controller whose "{job}" job fails'))
def given_failing_job(routing_context: RoutingContext, job: str) -> None:
    """Wire a router whose executor fails ``job``."""
    routing_context["harness"] = build_harness(fail_jobs=(job,))


@given(parsers.parse('a controller whose "{job}" job fails and whose report {n:d} fails'))
def given_failing_job_and_report(
    routing_context: RoutingContext, job: str, n: int
) -> None:
    """Wire a router whose executor fails ``job`` and reporter fails send ``n``."""
    routing_context["harness"] = build_harness(fail_jobs=(job,), fail_reports=(n,))


@when(parsers.parse('a push to "{ref}" is handled'))
def when_push(routing_context: RoutingContext, ref: str) -> None:
    """Dispatch a push event for ``ref``."""
    _handle(routing_context, make_event("push", ref=ref))


@when(parsers.parse('a check suite is requested for "{ref}"'))
def when_check_suite(routing_context: RoutingContext, ref: str) -> None:
    """Dispatch a check_suite:requested event for ``ref``."""
    _handle(routing_context, make_event("check_suite", "requested", ref=ref))


@when(parsers.parse('the comment "{body}" is posted'))
def when_comment(routing_context: RoutingContext, body: str) -> None:
    """Dispatch an issue_comment:created event."""
    _handle(
        routing_context,
        make_event("issue_comment", "created", payload=comment_payload(body)),
    )


@when(parsers.parse('the check run "{name}" is re-requested'))
def when_check_run(routing_context: RoutingContext, name: str) -> None:
    """Dispatch a check_run:rerequested event naming ``name``."""
    _handle(
        routing_context,
        make_event("check_run", "rerequested", payload=check_run_payload(name)),
    )


@then(parsers.parse('the jobs run are "{names}"'))
def then_jobs_run(routing_context: RoutingContext, names: str) -> None:
    """Assert the executor ran exactly ``names`` in order."""
    expected = [name.strip() for name in names.split(",")]
    actual = routing_context["harness"].executor.job_names
    assert actual == expected, f"expected jobs {expected}, got {actual}"


@then(parsers.parse('the publish job uses version "{version}"'))
def then_publish_version(routing_context: RoutingContext, version: str) -> None:
    """Assert the publish job was built for ``version``."""
    job = routing_context["harness"].executor.jobs[-1]
    assert f"VERSION={version} make" in job.tasks[5], job.tasks[5]


@then("the publish job uses the edge version")
def then_publish_edge(routing_context: RoutingContext) -> None:
    """Assert the publish job was built with an empty version."""
    job = routing_context["harness"].executor.jobs[-1]
    assert "VERSION= make" in job.tasks[5], job.tasks[5]


@then("no jobs run")
def then_no_jobs(routing_context: RoutingContext) -> None:
    """Assert the executor was never called."""
    assert routing_context["harness"].executor.calls == []


@then(parsers.parse('the reported conclusions are "{conclusions}"'))
def then_conclusions(routing_context: RoutingContext, conclusions: str) -> None:
    """Assert the sequence of reported conclusions; ``pending`` is empty."""
    expected = [
        "" if item.strip() == "pending" else item.strip()
        for item in conclusions.split(",")
    ]
    actual = routing_context["harness"].reporter.conclusions
    assert actual == expected, f"expected {expected}, got {actual}"


@then("the handling failed")
@then("the handling failed with the job error")
def then_job_failed(routing_context: RoutingContext) -> None:
    """Assert the job failure reached the caller."""
    assert isinstance(routing_context.get("error"), JobFailedError)


@then("the handling failed with an unknown check error")
def then_unknown_check(routing_context: RoutingContext) -> None:
    """Assert the unknown check surfaced as a configuration error."""
    assert isinstance(routing_context.get("error"), UnknownCheckError)


@then("the handling succeeded")
def then_succeeded(routing_context: RoutingContext) -> None:
    """Assert no error reached the caller."""
    assert routing_context.get("error") is None


@then("nothing was reported")
def then_nothing_reported(routing_context: RoutingContext) -> None:
    """Assert the reporter was never called."""
    assert routing_context["harness"].reporter.snapshots == []
