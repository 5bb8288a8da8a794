"""Job specification and result types handed to the executor."""

from __future__ import annotations

import dataclasses as dc
import types
import typing as typ


def _freeze_env(env: typ.Mapping[str, str]) -> typ.Mapping[str, str]:
    return types.MappingProxyType(dict(env))


@dc.dataclass(frozen=True, slots=True)
class JobSpec:
    """Immutable description of one containerised unit of work.

    Attributes
    ----------
    name
        Job name, unique within the handling of one event.
    image
        Container image reference.
    tasks
        Shell commands run in order inside the container.
    env
        Environment variables for the container. Stored read-only.
    mount_path
        Where the project source is mounted, if anywhere.
    privileged
        Whether the container needs privileged mode (docker-in-docker).
    image_force_pull
        Pull the image even when a copy is cached, for mutable tags.

    """

    name: str
    image: str
    tasks: tuple[str, ...] = ()
    env: typ.Mapping[str, str] = dc.field(default_factory=dict)
    mount_path: str | None = None
    privileged: bool = False
    image_force_pull: bool = False

    def __post_init__(self) -> None:
        """Freeze ``tasks`` and ``env`` against later mutation."""
        object.__setattr__(self, "tasks", tuple(self.tasks))
        object.__setattr__(self, "env", _freeze_env(self.env))


@dc.dataclass(frozen=True, slots=True)
class JobResult:
    """Output captured from a job that completed successfully."""

    job_name: str
    output: str = ""

    def __str__(self) -> str:
        """Return the captured output."""
        return self.output
