"""Unit tests for PipelineConfig."""

from __future__ import annotations

import pytest

from brigade_ci.config import (
    DEFAULT_CHECK_RUN_IMAGE,
    DEFAULT_REGISTRY,
    DEFAULT_SOURCE_PATH,
    PipelineConfig,
)
from brigade_ci.errors import PipelineConfigError

_ENV_VARS = (
    "BRIGADE_CI_TEST_IMAGE",
    "BRIGADE_CI_SOURCE_PATH",
    "BRIGADE_CI_DEFAULT_REGISTRY",
    "BRIGADE_CI_DEFAULT_ORG",
    "BRIGADE_CI_BUILD_IMAGE",
    "BRIGADE_CI_CHECK_RUN_IMAGE",
    "BRIGADE_CI_DETAILS_URL_BASE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    """Defaults point at the brigade-github-app source tree."""
    config = PipelineConfig()
    assert config.source_path == (
        "/go/src/github.com/brigadecore/brigade-github-app"
    )
    assert config.default_registry == "docker.io"
    assert config.default_org == "brigadecore"
    assert config.check_run_image == "brigadecore/brigade-github-check-run:edge"


def test_details_url() -> None:
    """Details URLs append the build id to the base."""
    config = PipelineConfig(details_url_base="https://ci.example.test/builds/")
    assert config.details_url("b1") == "https://ci.example.test/builds/b1"


def test_from_env_without_overrides_matches_defaults() -> None:
    """An empty environment yields the default configuration."""
    assert PipelineConfig.from_env() == PipelineConfig()


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set variables replace their defaults; blank ones are ignored."""
    monkeypatch.setenv("BRIGADE_CI_DEFAULT_ORG", " acme ")
    monkeypatch.setenv("BRIGADE_CI_DEFAULT_REGISTRY", "   ")
    monkeypatch.setenv("BRIGADE_CI_DETAILS_URL_BASE", "http://kashti.local/builds")

    config = PipelineConfig.from_env()

    assert config.default_org == "acme"
    assert config.default_registry == DEFAULT_REGISTRY
    assert config.source_path == DEFAULT_SOURCE_PATH
    assert config.check_run_image == DEFAULT_CHECK_RUN_IMAGE
    assert config.details_url("7") == "http://kashti.local/builds/7"


def test_from_env_rejects_non_http_details_url(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """The details URL base must be an http(s) URL."""
    monkeypatch.setenv("BRIGADE_CI_DETAILS_URL_BASE", "kashti/builds")
    with pytest.raises(PipelineConfigError, match="BRIGADE_CI_DETAILS_URL_BASE"):
        PipelineConfig.from_env()
