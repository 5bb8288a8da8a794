"""Typed models for inbound repository events.

Events arrive from the webhook layer already split into a category, an
action and a revision. The payload stays opaque JSON text: it is forwarded
verbatim to the check-run reporter and only two fields are ever read from
it, through :class:`EventPayload`.
"""

from __future__ import annotations

import msgspec

from brigade_ci.errors import EventPayloadError


class Revision(msgspec.Struct, kw_only=True, frozen=True):
    """The git revision an event refers to."""

    ref: str = ""
    commit: str = ""


class Event(msgspec.Struct, kw_only=True, frozen=True):
    """A single repository event.

    Attributes
    ----------
    category
        Event category, e.g. ``push``, ``check_suite`` or ``issue_comment``.
    action
        Event action, e.g. ``requested`` or ``created``. Empty for
        categories without actions (``push``, ``exec``).
    revision
        Ref and commit the event refers to.
    payload
        Raw JSON payload text as delivered by the webhook layer.
    build_id
        Identifier correlating every job derived from this event.

    """

    category: str
    action: str = ""
    revision: Revision = msgspec.field(default_factory=Revision)
    payload: str = ""
    build_id: str = ""

    @property
    def route_key(self) -> str:
        """Return the ``category:action`` label used in logs."""
        if not self.action:
            return self.category
        return f"{self.category}:{self.action}"


class Project(msgspec.Struct, kw_only=True, frozen=True):
    """Handle on the project secrets supplied with each event."""

    name: str = ""
    secrets: dict[str, str] = msgspec.field(default_factory=dict)

    def secret(self, key: str) -> str:
        """Return the secret ``key``, or an empty string when unset."""
        return self.secrets.get(key, "")


class _Comment(msgspec.Struct, kw_only=True):
    body: str = ""


class _CheckRun(msgspec.Struct, kw_only=True):
    name: str = ""


class _PayloadBody(msgspec.Struct, kw_only=True):
    comment: _Comment | None = None
    check_run: _CheckRun | None = None


class _PayloadEnvelope(msgspec.Struct, kw_only=True):
    body: _PayloadBody = msgspec.field(default_factory=_PayloadBody)


class EventPayload:
    """Read-only view over the two payload fields the controller consults."""

    __slots__ = ("_body",)

    def __init__(self, body: _PayloadBody) -> None:
        self._body = body

    @classmethod
    def parse(cls, raw: str | bytes) -> EventPayload:
        """Decode ``raw`` payload JSON.

        Unknown fields are ignored; only ``body.comment.body`` and
        ``body.check_run.name`` are kept.

        Raises
        ------
        EventPayloadError
            If ``raw`` is not JSON or its fields have the wrong types.

        """
        try:
            envelope = msgspec.json.decode(raw or b"{}", type=_PayloadEnvelope)
        except msgspec.DecodeError as exc:
            raise EventPayloadError.invalid_json(str(exc)) from exc
        return cls(envelope.body)

    @property
    def comment_body(self) -> str:
        """Return the comment text with surrounding whitespace removed."""
        if self._body.comment is None:
            raise EventPayloadError.missing("body.comment.body")
        return self._body.comment.body.strip()

    @property
    def check_run_name(self) -> str:
        """Return the name of the requested check run."""
        if self._body.check_run is None:
            raise EventPayloadError.missing("body.check_run.name")
        return self._body.check_run.name


def decode_event(raw: bytes | str) -> Event:
    """Decode an :class:`Event` from JSON."""
    return msgspec.json.decode(raw, type=Event)


def decode_project(raw: bytes | str) -> Project:
    """Decode a :class:`Project` from JSON."""
    return msgspec.json.decode(raw, type=Project)


__all__ = [
    "Event",
    "EventPayload",
    "Project",
    "Revision",
    "decode_event",
    "decode_project",
]
