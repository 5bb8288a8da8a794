"""Pipeline configuration for job builders and check reporting.

Defaults describe the brigade-github-app repository this controller was
written for. Each value can be overridden from the environment:

>>> import os
>>> os.environ["BRIGADE_CI_DEFAULT_ORG"] = "acme"
>>> PipelineConfig.from_env().default_org
'acme'

"""

from __future__ import annotations

import dataclasses as dc
import os

from brigade_ci.errors import PipelineConfigError

PROJECT_ORG = "brigadecore"
PROJECT_NAME = "brigade-github-app"
GOPATH = "/go"

DEFAULT_TEST_IMAGE = "quay.io/deis/lightweight-docker-go:v0.6.0"
DEFAULT_SOURCE_PATH = f"{GOPATH}/src/github.com/{PROJECT_ORG}/{PROJECT_NAME}"
DEFAULT_REGISTRY = "docker.io"
DEFAULT_ORG = PROJECT_ORG
DEFAULT_BUILD_IMAGE = "docker:stable-dind"
# Mutable "edge" tag so the check-run utility from master is exercised.
DEFAULT_CHECK_RUN_IMAGE = "brigadecore/brigade-github-check-run:edge"
DEFAULT_DETAILS_URL_BASE = "https://brigadecore.github.io/kashti/builds"


@dc.dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Settings shared by the action builders and the check reporter.

    Attributes
    ----------
    test_image
        Image used by the ``tests`` job.
    source_path
        Mount path of the project source inside the test container.
    default_registry
        Registry used when the project has no ``dockerhubRegistry`` secret.
    default_org
        Organisation used when the project has no ``dockerhubOrg`` secret.
    build_image
        Docker-in-docker image used to build and publish images.
    check_run_image
        Image that posts a notification snapshot to the checks API.
    details_url_base
        Prefix for the per-build details URL shown on each check.

    """

    test_image: str = DEFAULT_TEST_IMAGE
    source_path: str = DEFAULT_SOURCE_PATH
    default_registry: str = DEFAULT_REGISTRY
    default_org: str = DEFAULT_ORG
    build_image: str = DEFAULT_BUILD_IMAGE
    check_run_image: str = DEFAULT_CHECK_RUN_IMAGE
    details_url_base: str = DEFAULT_DETAILS_URL_BASE

    def details_url(self, build_id: str) -> str:
        """Return the details URL for ``build_id``."""
        return f"{self.details_url_base.rstrip('/')}/{build_id}"

    @staticmethod
    def _read(env_var: str, default: str) -> str:
        raw = os.environ.get(env_var, "")
        return raw.strip() or default

    @classmethod
    def from_env(cls) -> PipelineConfig:
        """Create configuration from ``BRIGADE_CI_*`` environment variables.

        Reads ``BRIGADE_CI_TEST_IMAGE``, ``BRIGADE_CI_SOURCE_PATH``,
        ``BRIGADE_CI_DEFAULT_REGISTRY``, ``BRIGADE_CI_DEFAULT_ORG``,
        ``BRIGADE_CI_BUILD_IMAGE``, ``BRIGADE_CI_CHECK_RUN_IMAGE`` and
        ``BRIGADE_CI_DETAILS_URL_BASE``. Unset or blank values keep their
        defaults.

        Raises
        ------
        PipelineConfigError
            If ``BRIGADE_CI_DETAILS_URL_BASE`` is not an http(s) URL.

        """
        details_url_base = cls._read(
            "BRIGADE_CI_DETAILS_URL_BASE", DEFAULT_DETAILS_URL_BASE
        )
        if not details_url_base.startswith(("http://", "https://")):
            raise PipelineConfigError.invalid_url(
                "BRIGADE_CI_DETAILS_URL_BASE", details_url_base
            )

        return cls(
            test_image=cls._read("BRIGADE_CI_TEST_IMAGE", DEFAULT_TEST_IMAGE),
            source_path=cls._read("BRIGADE_CI_SOURCE_PATH", DEFAULT_SOURCE_PATH),
            default_registry=cls._read(
                "BRIGADE_CI_DEFAULT_REGISTRY", DEFAULT_REGISTRY
            ),
            default_org=cls._read("BRIGADE_CI_DEFAULT_ORG", DEFAULT_ORG),
            build_image=cls._read("BRIGADE_CI_BUILD_IMAGE", DEFAULT_BUILD_IMAGE),
            check_run_image=cls._read(
                "BRIGADE_CI_CHECK_RUN_IMAGE", DEFAULT_CHECK_RUN_IMAGE
            ),
            details_url_base=details_url_base,
        )
