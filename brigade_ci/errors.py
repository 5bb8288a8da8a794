"""Exception hierarchy for the CI controller."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class BrigadeCIError(Exception):
    """Base class for all controller errors."""


class EventPayloadError(BrigadeCIError):
    """Raised when an event payload cannot be read."""

    @classmethod
    def invalid_json(cls, detail: str) -> EventPayloadError:
        """Return an error for payload text that is not valid JSON."""
        return cls(f"Event payload is not valid JSON: {detail}")

    @classmethod
    def missing(cls, field: str) -> EventPayloadError:
        """Return an error for a payload without ``field``."""
        return cls(f"Event payload missing expected field: {field}")


class UnknownCheckError(BrigadeCIError):
    """Raised when a check run names a check this controller does not define.

    This is a configuration error: there is no check context to report
    against, so no notification is sent.
    """

    def __init__(self, message: str, *, name: str) -> None:
        """Initialise with a message and the unrecognised check name."""
        self.name = name
        super().__init__(message)

    @classmethod
    def for_name(
        cls, name: str, known: cabc.Iterable[str]
    ) -> UnknownCheckError:
        """Return an error listing the checks that are available."""
        known_str = ", ".join(f"'{check}'" for check in sorted(known))
        return cls(
            f"No check found with name: {name} (known checks: {known_str})",
            name=name,
        )


class NotificationStateError(BrigadeCIError):
    """Raised when a notification would leave a terminal conclusion."""

    @classmethod
    def already_concluded(cls, name: str, conclusion: str) -> NotificationStateError:
        """Return an error for a second terminal transition."""
        return cls(f"Notification {name!r} already concluded with {conclusion!r}")

    @classmethod
    def not_terminal(cls, name: str, conclusion: str) -> NotificationStateError:
        """Return an error for concluding with a non-terminal value."""
        return cls(f"Notification {name!r} cannot conclude with {conclusion!r}")


class PipelineConfigError(BrigadeCIError):
    """Raised when pipeline configuration from the environment is invalid."""

    @classmethod
    def invalid_url(cls, env_var: str, value: str) -> PipelineConfigError:
        """Return an error for a URL setting without an http(s) scheme."""
        return cls(f"{env_var} must be an http(s) URL, got: {value!r}")


__all__ = [
    "BrigadeCIError",
    "EventPayloadError",
    "NotificationStateError",
    "PipelineConfigError",
    "UnknownCheckError",
]
