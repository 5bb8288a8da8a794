"""Unit tests for event models and the payload accessor."""

from __future__ import annotations

import msgspec
import pytest

from brigade_ci.errors import EventPayloadError
from brigade_ci.events import EventPayload, decode_event, decode_project
from tests.helpers.event_builders import (
    check_run_payload,
    comment_payload,
    make_event,
)


class TestEventPayload:
    """Tests for ``EventPayload``."""

    def test_comment_body_is_trimmed(self) -> None:
        """Comment text is returned without surrounding whitespace."""
        payload = EventPayload.parse(comment_payload("  /brig run \n"))
        assert payload.comment_body == "/brig run"

    def test_check_run_name(self) -> None:
        """The check run name is read from ``body.check_run.name``."""
        assert EventPayload.parse(check_run_payload("tests")).check_run_name == "tests"

    def test_unknown_fields_are_ignored(self) -> None:
        """Extra payload content does not affect decoding."""
        raw = msgspec.json.encode(
            {
                "body": {"check_run": {"name": "tests", "id": 7}, "sender": {}},
                "token": "secret",
            }
        )
        assert EventPayload.parse(raw).check_run_name == "tests"

    def test_missing_comment_raises(self) -> None:
        """A payload without a comment cannot be read as one."""
        payload = EventPayload.parse(check_run_payload("tests"))
        with pytest.raises(EventPayloadError, match="body.comment.body"):
            _ = payload.comment_body

    def test_empty_payload_has_no_fields(self) -> None:
        """An empty payload decodes, but carries no check run."""
        with pytest.raises(EventPayloadError, match="body.check_run.name"):
            _ = EventPayload.parse("").check_run_name

    def test_invalid_json_raises(self) -> None:
        """Malformed JSON is reported as a payload error."""
        with pytest.raises(EventPayloadError, match="not valid JSON"):
            EventPayload.parse("{not json")

    def test_wrong_field_type_raises(self) -> None:
        """Type mismatches are reported as payload errors."""
        with pytest.raises(EventPayloadError):
            EventPayload.parse('{"body": {"comment": {"body": 3}}}')


def test_route_key_includes_action_when_present() -> None:
    """route_key joins category and action."""
    assert make_event("check_suite", "requested").route_key == "check_suite:requested"
    assert make_event("push").route_key == "push"


def test_decode_event_from_json() -> None:
    """Events decode from the JSON shape used by the CLI."""
    event = decode_event(
        b'{"category": "push", "revision": {"ref": "refs/heads/master",'
        b' "commit": "abc"}, "build_id": "b1"}'
    )
    assert event.category == "push"
    assert event.action == ""
    assert event.revision.ref == "refs/heads/master"
    assert event.build_id == "b1"


def test_decode_project_secrets() -> None:
    """Project secrets decode into a string mapping."""
    project = decode_project(b'{"secrets": {"dockerhubOrg": "acme"}}')
    assert project.secret("dockerhubOrg") == "acme"
    assert project.secret("dockerhubRegistry") == ""
