"""Action builders producing the job specifications for each pipeline."""

from __future__ import annotations

import typing as typ

from brigade_ci.config import PipelineConfig
from brigade_ci.jobs.models import JobSpec

if typ.TYPE_CHECKING:
    from brigade_ci.events import Project

TEST_JOB_NAME = "tests"
BUILD_AND_PUBLISH_JOB_NAME = "build-and-publish-images"

# Project secret keys consumed by the build-and-publish job.
REGISTRY_SECRET = "dockerhubRegistry"
ORG_SECRET = "dockerhubOrg"
USERNAME_SECRET = "dockerhubUsername"
PASSWORD_SECRET = "dockerhubPassword"  # noqa: S105 - secret key name, not a value

# Seconds to wait for the nested docker daemon to come up.
_DOCKERD_STARTUP_WAIT = 20


def build_test_job(config: PipelineConfig | None = None) -> JobSpec:
    """Return the job running verification, lint and unit test targets."""
    config = config or PipelineConfig()
    return JobSpec(
        name=TEST_JOB_NAME,
        image=config.test_image,
        mount_path=config.source_path,
        env={"SKIP_DOCKER": "true"},
        tasks=(
            f"cd {config.source_path}",
            "make verify-vendored-code lint test",
        ),
    )


def build_and_publish_images_job(
    project: Project,
    version: str,
    config: PipelineConfig | None = None,
) -> JobSpec:
    """Return the job that builds every image and pushes it to a registry.

    Parameters
    ----------
    project
        Project whose secrets supply the registry, organisation and
        credentials.
    version
        Image version label. An empty string publishes the floating
        ``edge`` images.
    config
        Defaults for registry and organisation when the project does not
        set them.

    Returns
    -------
    JobSpec
        A privileged docker-in-docker job.

    Notes
    -----
    Credentials are not validated here. Missing ones surface as a
    ``docker login`` failure when the executor runs the job.

    """
    config = config or PipelineConfig()
    registry = project.secret(REGISTRY_SECRET) or config.default_registry
    org = project.secret(ORG_SECRET) or config.default_org
    username = project.secret(USERNAME_SECRET)
    password = project.secret(PASSWORD_SECRET)
    return JobSpec(
        name=BUILD_AND_PUBLISH_JOB_NAME,
        image=config.build_image,
        privileged=True,
        tasks=(
            "apk add --update --no-cache make git",
            "dockerd-entrypoint.sh &",
            f"sleep {_DOCKERD_STARTUP_WAIT}",
            "cd /src",
            f"docker login {registry} -u {username} -p {password}",
            f"DOCKER_REGISTRY={registry} DOCKER_ORG={org} VERSION={version} "
            "make build-all-images push-all-images",
            f"docker logout {registry}",
        ),
    )
