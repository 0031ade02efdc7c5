"""Typed errors shared by providers, the resolver, surfaces and flows."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

_SCALARS = (str, int, float, bool, type(None))


def _jsonable(value: Any) -> Any:
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Copy an error context so that it can be dumped as JSON.

    Containers are converted recursively; any other object becomes its ``str``.
    """
    return {str(key): _jsonable(value) for key, value in context.items()}


class CAError(Exception):
    """Base class for every failure the code action pipeline reports."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context) if context else {}
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class ProviderError(CAError):
    """One provider's branch of a code action fan-out failed."""


class ResolveError(CAError):
    """A ``codeAction/resolve`` round-trip answered with an error.

    ``str(err)`` is the ``"<code>: <message>"`` notice shown to the user.
    """

    def __init__(
        self,
        code: int,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}", context=context, cause=cause)


class SurfaceError(CAError):
    """A surface or content handle is unknown, already closed, or unfocusable."""


class SessionBusyError(CAError):
    """A code action menu is still open when another one was requested."""


class ConfigurationError(CAError):
    """Code action options could not be read or validated."""


E = TypeVar("E", bound=CAError)


def wrap_error(
    error_cls: type[E],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> E:
    return error_cls(message, context=context, cause=cause)


def error_to_payload(error: CAError) -> dict[str, Any]:
    """Flatten an error into ``extra`` fields for a structured log record."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
