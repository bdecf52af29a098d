"""
Custom exception classes for telegram_types.

Decode errors carry the full field path of the offending value so callers can
tell exactly where a document diverged from the schema, e.g.
``chat.pinned_message.from.id`` or ``photo[1].file_id``.
"""

from typing import Any, Iterable, Optional, Tuple

ROOT_PATH = "<root>"


class TelegramTypesException(Exception):
    """Base exception class for all telegram_types exceptions."""

    pass


class RegistryError(TelegramTypesException):
    """Raised when an entity or variant group cannot be registered or looked up."""

    pass


class DecodeError(TelegramTypesException):
    """
    Base class for every failure while mapping a document onto a type.

    All decode errors are recoverable: the decoder never leaves partial state
    behind, so the caller may log, skip the document, or try another target.
    """

    def __init__(self, path: str, message: str):
        self.path = path or ROOT_PATH
        self.message = message
        super().__init__(f"{self.path}: {message}")


class MissingRequiredField(DecodeError):
    """Raised when a required field is absent from the document."""

    def __init__(self, path: str):
        super().__init__(path, "missing required field")


class TypeMismatch(DecodeError):
    """
    Raised when a field is present but has the wrong shape.

    Example:
        >>> raise TypeMismatch("message.date", expected="integer", actual="str")
    """

    def __init__(self, path: str, expected: str, actual: str, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(path, message or f"expected {expected}, found {actual}")


class UnknownField(TypeMismatch):
    """Raised in strict mode when a document carries a field the entity does not declare."""

    def __init__(self, path: str, name: str):
        self.name = name
        super().__init__(
            path,
            expected="declared field",
            actual=f"undeclared field {name!r}",
            message=f"unknown field {name!r}",
        )


class IntegerOutOfRange(DecodeError):
    """Raised when an integer does not fit the declared width of its field."""

    def __init__(self, path: str, value: int, bounds: Tuple[int, int]):
        self.value = value
        self.bounds = bounds
        low, high = bounds
        super().__init__(path, f"integer {value} outside [{low}, {high}]")


class NoMatchingVariant(DecodeError):
    """Raised when no member of a variant group accepts the document shape."""

    def __init__(self, path: str, group: str, present_fields: Iterable[str]):
        self.group = group
        self.present_fields = tuple(sorted(present_fields))
        super().__init__(
            path,
            f"no {group} variant matches fields {list(self.present_fields)}",
        )


class AmbiguousVariant(DecodeError):
    """
    Raised when several members of a variant group match equally well.

    This points at a modelling defect in the group: it is never resolved by
    picking the first member.
    """

    def __init__(self, path: str, group: str, candidates: Iterable[str]):
        self.group = group
        self.candidates = tuple(candidates)
        super().__init__(
            path,
            f"ambiguous {group} variant, candidates {list(self.candidates)}",
        )


class NestingTooDeep(DecodeError):
    """Raised when a document nests objects or arrays beyond the decoder's depth limit."""

    def __init__(self, path: str, limit: int):
        self.limit = limit
        super().__init__(path, f"nesting deeper than {limit} levels")


class MalformedInput(DecodeError):
    """Raised when raw input cannot be parsed into a document at all."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(ROOT_PATH, f"malformed input: {reason}")


class ApiError(TelegramTypesException):
    """
    Raised when the Bot API answers with ``ok: false``.

    Carries the upstream ``error_code``, ``description`` and the optional
    ``parameters`` (a decoded ``ResponseParameters``) so callers can react to
    ``retry_after`` or ``migrate_to_chat_id``.
    """

    def __init__(self, error_code: int, description: str, parameters: Any = None):
        self.error_code = error_code
        self.description = description
        self.parameters = parameters
        super().__init__(f"[{error_code}] {description}")
