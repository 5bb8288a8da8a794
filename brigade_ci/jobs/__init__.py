"""Job specifications, builders and the executor interface.

Public API
----------
JobSpec
    Immutable description of one containerised unit of work.
JobResult
    Output of a successful job.
JobExecutor
    Protocol for the external job runtime.
JobFailedError
    Raised by executors when a job fails.
DryRunExecutor
    Executor that records jobs without running them.
build_test_job
    Builder for the ``tests`` job.
build_and_publish_images_job
    Builder for the ``build-and-publish-images`` job.

"""

from __future__ import annotations

from brigade_ci.jobs.builders import (
    BUILD_AND_PUBLISH_JOB_NAME,
    TEST_JOB_NAME,
    build_and_publish_images_job,
    build_test_job,
)
from brigade_ci.jobs.dry_run import DryRunExecutor
from brigade_ci.jobs.models import JobResult, JobSpec
from brigade_ci.jobs.protocol import JobExecutor, JobFailedError

__all__ = [
    "BUILD_AND_PUBLISH_JOB_NAME",
    "TEST_JOB_NAME",
    "DryRunExecutor",
    "JobExecutor",
    "JobFailedError",
    "JobResult",
    "JobSpec",
    "build_and_publish_images_job",
    "build_test_job",
]
