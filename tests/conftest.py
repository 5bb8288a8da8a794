"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import dataclasses

import pytest

from brigade_ci.checks import PipelineDependencies
from brigade_ci.router import EventRouter
from tests.helpers.fakes import FakeExecutor, FakeReporter


@dataclasses.dataclass(slots=True)
class ControllerHarness:
    """A router wired to fakes that share one call log."""

    executor: FakeExecutor
    reporter: FakeReporter
    router: EventRouter
    calls: list[tuple[str, str]]


def build_harness(
    *,
    fail_jobs: tuple[str, ...] = (),
    fail_reports: tuple[int, ...] = (),
) -> ControllerHarness:
    """Return a router whose executor fails ``fail_jobs``."""
    calls: list[tuple[str, str]] = []
    executor = FakeExecutor(fail=fail_jobs, calls=calls)
    reporter = FakeReporter(fail_on=fail_reports, calls=calls)
    router = EventRouter(PipelineDependencies(executor=executor, reporter=reporter))
    return ControllerHarness(
        executor=executor, reporter=reporter, router=router, calls=calls
    )


@pytest.fixture
def harness() -> ControllerHarness:
    """Provide a router with succeeding fakes."""
    return build_harness()
