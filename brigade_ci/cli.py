"""Route a recorded event through the controller without running any jobs."""

from __future__ import annotations

import argparse
import asyncio
import os
from pathlib import Path

import msgspec

from brigade_ci.checks import CheckRunJobReporter, PipelineDependencies
from brigade_ci.config import PipelineConfig
from brigade_ci.errors import BrigadeCIError
from brigade_ci.events import Event, Project, decode_event, decode_project
from brigade_ci.jobs import DryRunExecutor, JobSpec
from brigade_ci.logging import configure_logging, get_logger, log_warning
from brigade_ci.router import EventRouter

logger = get_logger(__name__)


async def _route(
    event: Event, project: Project, config: PipelineConfig
) -> list[JobSpec]:
    executor = DryRunExecutor()
    deps = PipelineDependencies(
        executor=executor,
        reporter=CheckRunJobReporter(executor, config),
        config=config,
    )
    await EventRouter(deps).dispatch(event, project)
    return executor.jobs


def main(argv: list[str] | None = None) -> int:
    """Dry-run an event file and print the jobs it would start.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when the input is invalid or handling
        fails.

    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("event", type=Path, help="JSON-encoded event to route")
    parser.add_argument(
        "--project",
        type=Path,
        default=None,
        help="Optional JSON-encoded project with secrets",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("BRIGADE_CI_LOG_LEVEL", "INFO"),
        help="femtologging level (default: BRIGADE_CI_LOG_LEVEL or INFO)",
    )
    args = parser.parse_args(argv)

    normalized_level, invalid_level = configure_logging(args.log_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid log level %r, falling back to %s",
            args.log_level,
            normalized_level,
        )

    try:
        event = decode_event(args.event.read_bytes())
        project = (
            decode_project(args.project.read_bytes()) if args.project else Project()
        )
        config = PipelineConfig.from_env()
    except (OSError, msgspec.DecodeError, BrigadeCIError) as exc:
        print(f"Cannot load event {args.event}: {exc}")
        return 1

    try:
        jobs = asyncio.run(_route(event, project, config))
    except BrigadeCIError as exc:
        print(f"Event {event.route_key} failed: {exc}")
        return 1

    if not jobs:
        print(f"event {event.route_key} started no jobs")
        return 0
    print(f"event {event.route_key} would start {len(jobs)} job(s):")
    for job in jobs:
        print(f"  - {job.name} ({job.image})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
