"""Notification state for one check reported to the checks API.

A :class:`Notification` is sent at least twice: once while its job is
pending and once with the final conclusion. Each send takes an immutable
:class:`NotificationSnapshot` with its own send identity, so the reporter
never observes a half-updated record.
"""

from __future__ import annotations

import enum
import typing as typ

import msgspec

from brigade_ci.errors import NotificationStateError

if typ.TYPE_CHECKING:
    from brigade_ci.checks.reporter import CheckReporter
    from brigade_ci.events import Event
    from brigade_ci.jobs.models import JobResult

DEFAULT_TITLE = "running check"


class Conclusion(enum.StrEnum):
    """Conclusions accepted by the checks API."""

    NEUTRAL = "neutral"
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"


_TERMINAL = frozenset(
    {
        Conclusion.SUCCESS,
        Conclusion.FAILURE,
        Conclusion.CANCELLED,
        Conclusion.TIMED_OUT,
    }
)


class NotificationSnapshot(msgspec.Struct, kw_only=True, frozen=True):
    """The state of a notification at the moment it was sent.

    Attributes
    ----------
    send_id
        ``<name>-notification-<count>``; distinct for every send.
    count
        Send number, starting at 1.
    conclusion
        Conclusion value, or an empty string while the check is pending.
    name
        Check name shown on the checks API.
    title
        Check title.
    payload
        Raw payload of the originating event.
    summary
        Short summary line.
    text
        Free-text body.
    details_url
        Link to the build details page.
    external_id
        Build identifier of the originating event.

    """

    send_id: str
    count: int
    conclusion: str
    name: str
    title: str
    payload: str
    summary: str
    text: str
    details_url: str
    external_id: str


class Notification:
    """Mutable check status bound to one event and one reporter.

    Examples
    --------
    >>> note = Notification("tests", event, reporter, details_url=url)
    >>> await note.send()
    >>> note.conclude(Conclusion.SUCCESS, summary="passed", text="ok")
    >>> await note.send()
    >>> note.count
    2

    """

    def __init__(  # noqa: PLR0913 - mirrors the check-run fields
        self,
        name: str,
        event: Event,
        reporter: CheckReporter,
        *,
        details_url: str,
        title: str = DEFAULT_TITLE,
        summary: str = "",
        text: str = "",
    ) -> None:
        """Bind a new neutral notification to ``event``."""
        self.name = name
        self.payload = event.payload
        self.external_id = event.build_id
        self.details_url = details_url
        self.title = title
        self.summary = summary
        self.text = text
        self.count = 0
        self.conclusion: Conclusion | None = Conclusion.NEUTRAL
        self._reporter = reporter

    @property
    def is_concluded(self) -> bool:
        """Return whether a terminal conclusion has been set."""
        return self.conclusion in _TERMINAL

    def mark_pending(self) -> None:
        """Clear the conclusion so the check shows as in progress."""
        if self.is_concluded:
            raise NotificationStateError.already_concluded(
                self.name, str(self.conclusion)
            )
        self.conclusion = None

    def conclude(self, conclusion: Conclusion, *, summary: str, text: str) -> None:
        """Move to a terminal ``conclusion`` and replace summary and text.

        Raises
        ------
        NotificationStateError
            If the notification is already concluded or ``conclusion`` is
            ``neutral``.

        """
        if self.is_concluded:
            raise NotificationStateError.already_concluded(
                self.name, str(self.conclusion)
            )
        if conclusion not in _TERMINAL:
            raise NotificationStateError.not_terminal(self.name, str(conclusion))
        self.conclusion = conclusion
        self.summary = summary
        self.text = text

    def snapshot(self) -> NotificationSnapshot:
        """Return the current state under the current send identity."""
        return NotificationSnapshot(
            send_id=f"{self.name}-notification-{self.count}",
            count=self.count,
            conclusion="" if self.conclusion is None else str(self.conclusion),
            name=self.name,
            title=self.title,
            payload=self.payload,
            summary=self.summary,
            text=self.text,
            details_url=self.details_url,
            external_id=self.external_id,
        )

    async def send(self) -> JobResult:
        """Report the current state and return the reporter's result.

        The send counter is incremented before the snapshot is taken, even
        when the reporter subsequently fails.
        """
        self.count += 1
        return await self._reporter.report(self.snapshot())
